from .inst import Secp256k1Ops, make_secp256k1_params

__all__ = ["Secp256k1Ops", "make_secp256k1_params"]
