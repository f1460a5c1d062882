"""Concrete group instantiations for the Schnorr proof core."""
