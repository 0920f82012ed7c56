"""Synthesis of Hamiltonian / non-Hamiltonian labeled graph datasets."""
