# =============================================================================
# TREC/FMM/__init__.py — Format Mapping Module
# =============================================================================
#
# The FMM is the single source of truth for the ttyrec wire format: field
# widths, header offsets, timing units, editor defaults and the download
# name / MIME type handed to the save-as collaborator.
#
# All other TREC sub-modules (FVM, FGM, FEM) import exclusively from here.
# Never define format constants outside this module.
#
# Sub-modules:
#   constants.py  — header layout, timing units, editable-form defaults
#   dword.py      — unsigned 32-bit little-endian encode / decode
# =============================================================================
