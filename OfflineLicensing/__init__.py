"""
OfflineLicensing project package.

Holds the ambient configuration (settings, logging) shared by the
``core`` and ``licenses`` packages.
"""
