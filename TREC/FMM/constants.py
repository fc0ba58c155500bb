# =============================================================================
# constants.py — FMM ttyrec Format Constants
# =============================================================================
#
# Single source of truth for the ttyrec record layout and the editor defaults.
# Every other TREC sub-module imports its widths and offsets from here.
#
# Record layout (repeated until end of buffer, no file header or footer):
#
#   offset  width  field          encoding
#   ------  -----  -------------  ---------------------------
#     +0      4    seconds        uint32, little-endian
#     +4      4    microseconds   uint32, little-endian
#     +8      4    length         uint32, little-endian
#    +12    len    payload        raw bytes (terminal output)
#
# =============================================================================

# -----------------------------------------------------------------------------
# BINARY LAYOUT
# -----------------------------------------------------------------------------

DWORD_SIZE   = 4                       # every integer field is a 32-bit word
DWORD_MASK   = 0xFFFF_FFFF             # values are masked to 32 bits on encode
DWORD_FORMAT = "<I"                    # struct format: unsigned, little-endian

SECONDS_OFFSET      = 0
MICROSECONDS_OFFSET = 4
LENGTH_OFFSET       = 8
HEADER_SIZE         = 12               # seconds + microseconds + length

# -----------------------------------------------------------------------------
# TIMING
# -----------------------------------------------------------------------------

USEC_PER_SEC  = 1_000_000
USEC_TO_SEC   = 0.000001               # multiplier used to derive frame delays

# Carry is applied while the running microsecond field is STRICTLY greater
# than this value. A field of exactly 1,000,000 is emitted uncarried.
USEC_CARRY_LIMIT = USEC_PER_SEC

# -----------------------------------------------------------------------------
# EDITABLE FORM
# -----------------------------------------------------------------------------

DELAY_TEXT_FORMAT   = "%.6f"           # microsecond precision, e.g. "0.100000"
DEFAULT_DELAY_TEXT  = "0.100000"       # delay of a freshly added editor row
DEFAULT_DATA_TEXT   = ""               # payload of a freshly added editor row

ESCAPE_PREFIX       = "\\x"            # each payload byte is written as \xNN
ESCAPE_GROUP_SIZE   = 4                # len("\\x") + two hex digits

# -----------------------------------------------------------------------------
# FILE / DOWNLOAD
# -----------------------------------------------------------------------------

FILE_EXTENSION    = ".ttyrec"
DEFAULT_FILENAME  = "file.ttyrec"
MIME_TYPE         = "application/octet-stream; charset=binary"
