# =============================================================================
# FEM — Frame Editor Module
# =============================================================================
#
# Glue between the ttyrec codec and a browser-side editor table. The page owns
# every DOM concern (table rendering, Add / Remove links, drag & drop, the
# save-as download); Python owns every byte.
#
# Sub-modules
# -----------
# editor_bridge.py — JSON entry points, callable from Pyodide or any HTTP
#                    wrapper (see tools/ttyrec_bridge_server.py). Exposes:
#
#       parse_ttyrec_json(ttyrec_b64)         -> str   (rows for the table)
#       serialize_ttyrec_json(document_json)  -> str   (bytes for download)
#
# Pipeline
# --------
#   1. JS reads the dropped / opened file with FileReader → Uint8Array
#   2. JS base64-encodes it and calls parse_ttyrec_json
#   3. JS renders one <tr> per frame: delay_text | data_text | Remove
#   4. On Save, JS collects the rows in table order → serialize_ttyrec_json
#   5. JS decodes ttyrec_b64 → Blob(mime_type) → saveAs(filename)
# =============================================================================

from .editor_bridge import (
    parse_ttyrec,
    parse_ttyrec_json,
    serialize_ttyrec,
    serialize_ttyrec_json,
)

__all__ = [
    "parse_ttyrec",
    "parse_ttyrec_json",
    "serialize_ttyrec",
    "serialize_ttyrec_json",
]
