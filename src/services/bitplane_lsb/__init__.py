"""
Bit-plane LSB Steganography Service

Hides a length-prefixed byte message in the color channels of an
uncompressed RGB bitmap:
- 16-bit length field followed by the message, most significant bit first
- Red, green, blue channel order, row-major pixel traversal
- Least significant plane first, wrapping to higher planes when the
  message does not fit
- Bit plane visualization for inspecting embedded images
"""

__version__ = "1.0.0"
