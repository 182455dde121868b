"""
Wire format for the light controller.

Packet: b"GLOW" + count (1 byte) + count x (r, g, b) bytes.
No terminator, no checksum.
"""

import config

HEADER_SIZE = len(config.SIGNATURE) + 1


def packet_size(count=config.GLOW_COLORS):
    return HEADER_SIZE + count * 3


def to_byte(component):
    return min(255, max(0, int(round(component * 255))))


def encode_packet(colors, flip=False, count=config.GLOW_COLORS):
    """Build a packet from `count` colors. Flip reverses the wire order only."""
    if len(colors) != count:
        raise ValueError(f"Expected {count} colors, got {len(colors)}")
    if count > 255:
        raise ValueError(f"Light count {count} does not fit in a byte")

    packet = bytearray(config.SIGNATURE)
    packet.append(count)

    ordered = reversed(colors) if flip else colors
    for r, g, b in ordered:
        packet.extend([to_byte(r), to_byte(g), to_byte(b)])

    return bytes(packet)


def decode_packet(data):
    """Parse one complete packet into a list of (r, g, b) byte tuples."""
    data = bytes(data)
    if not data.startswith(config.SIGNATURE):
        raise ValueError("Missing packet signature")
    if len(data) < HEADER_SIZE:
        raise ValueError("Truncated packet header")

    count = data[len(config.SIGNATURE)]
    if len(data) != packet_size(count):
        raise ValueError(
            f"Packet size {len(data)} does not match {count} colors"
        )

    body = data[HEADER_SIZE:]
    return [tuple(body[i : i + 3]) for i in range(0, len(body), 3)]


class PacketReader:
    """Reassembles packets from an unframed byte stream, resyncing on the signature."""

    def __init__(self):
        self.buffer = bytearray()
        self.dropped = 0

    def feed(self, data):
        """Add received bytes, return the list of completed packets' colors."""
        self.buffer.extend(data)
        packets = []

        while True:
            start = self.buffer.find(config.SIGNATURE)
            if start < 0:
                # Keep a possible partial signature at the tail
                keep = len(config.SIGNATURE) - 1
                if len(self.buffer) > keep:
                    self.dropped += len(self.buffer) - keep
                    del self.buffer[: len(self.buffer) - keep]
                break

            if start > 0:
                self.dropped += start
                del self.buffer[:start]

            if len(self.buffer) < HEADER_SIZE:
                break

            size = packet_size(self.buffer[len(config.SIGNATURE)])
            if len(self.buffer) < size:
                break

            packets.append(decode_packet(self.buffer[:size]))
            del self.buffer[:size]

        return packets
