"""Nextellar -- scaffold Next.js + Stellar applications."""

__version__ = "0.1.0"
