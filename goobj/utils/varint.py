"""Zigzag varint codec.

Numbers are stored as 7 bits per byte, least significant group first, with the
high bit of each byte set when another byte follows. Signed values are zigzag
mapped first so that small negative numbers stay short."""

MASK64 = 2**64 - 1


def zigzag_encode(value):
    return ((value << 1) ^ (value >> 63)) & MASK64


def zigzag_decode(value):
    return (value >> 1) ^ -(value & 1)


def encode_varint(value):
    """Encodes a signed 64 bit integer into a bytes object"""
    u = zigzag_encode(value)
    out = bytearray()
    while u >= 0x80:
        out.append((u & 0x7F) | 0x80)
        u >>= 7
    out.append(u)
    return bytes(out)


def encode_string(s):
    """Length-prefixed string, as read by Cursor.read_string"""
    if isinstance(s, str):
        s = s.encode()
    return encode_varint(len(s)) + s
