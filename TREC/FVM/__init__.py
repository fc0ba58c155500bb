# =============================================================================
# TREC/FVM/__init__.py — Frame Verification Module
# =============================================================================
#
# The FVM decodes ttyrec byte streams and checks that they are structurally
# sound before they reach the editor.
#
# Sub-modules:
#   frame_parser.py     — parse(): buffer → Session of Frames with delays
#   inspect_session.py  — session inspector (CLI + importable report)
#   validate.py         — automated self-check suite for the FMM/FVM/FGM stack
# =============================================================================
