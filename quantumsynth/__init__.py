"""
QuantumSynth

A small HTTP service offering quantum-inspired text labelling,
noise synthesis and threshold collapse over in-memory data.
"""

__version__ = "1.0.0"
