from .inst import PyEccSecp256k1Ops, make_pyecc_secp256k1_params

__all__ = ["PyEccSecp256k1Ops", "make_pyecc_secp256k1_params"]
