# =============================================================================
# FGM — Frame Generation Module
# Subfolder of TREC (Terminal Recording Editor Core)
# =============================================================================
#
# Generates byte-exact ttyrec streams from the editable form of a session.
#
# Modules:
#   frame_writer.py  — serialize(): delay accumulation, carry, \xNN payloads
#   edit_session.py  — EditSession: ordered editor rows (add / remove / save)
#
# Constants live in TREC/FMM/constants.py
# Decoding and verification tools live in TREC/FVM/
