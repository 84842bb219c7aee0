"""Signal synthesis and spectral analysis stages."""
