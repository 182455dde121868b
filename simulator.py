"""
Light Controller Simulator

Plays the controller end of the serial link and prints each received packet.
Use this to test the pipeline without actual hardware, e.g. on one end of
a virtual serial port pair:

    socat -d -d pty,raw,echo=0 pty,raw,echo=0
    python main.py --simulate /dev/pts/3
    python main.py --port /dev/pts/4

or with a recorded byte stream on stdin:

    python main.py --simulate - < packets.bin
"""

import sys

import serial

import config
from protocol import PacketReader


def format_colors(colors):
    """One line of hex colors, e.g. '#ff0000 #00ff00'."""
    return " ".join(f"#{r:02x}{g:02x}{b:02x}" for r, g, b in colors)


class LightSimulator:
    def __init__(self, port, baud=config.BAUD_RATE):
        self.port = port
        self.baud = baud
        self.reader = PacketReader()
        self.led_colors = [(0, 0, 0)] * config.GLOW_COLORS
        self.packets = 0

    def handle_bytes(self, data):
        for colors in self.reader.feed(data):
            self.led_colors = colors
            self.packets += 1
            print(f"[Simulator] #{self.packets} {len(colors)} LEDs: {format_colors(colors)}")

    def read_stream(self, stream, chunk_size=256):
        """Feed bytes from a binary stream until it is exhausted."""
        while True:
            data = stream.read(chunk_size)
            if not data:
                break
            self.handle_bytes(data)
        return self.packets

    def run(self):
        """Read from the port until interrupted. Port '-' reads stdin."""
        if self.port == "-":
            print("[Simulator] Reading packets from stdin")
            try:
                self.read_stream(sys.stdin.buffer)
            except KeyboardInterrupt:
                print("[Simulator] Stopped")
            self._report_dropped()
            return True

        print(f"[Simulator] Listening on {self.port} @ {self.baud} baud")
        try:
            link = serial.serial_for_url(self.port, self.baud, timeout=0.1)
        except (serial.SerialException, OSError) as e:
            print(f"[Simulator] Unable to open {self.port}: {e}")
            return False

        try:
            while True:
                data = link.read(256)
                if data:
                    self.handle_bytes(data)
        except KeyboardInterrupt:
            print("[Simulator] Stopped")
        except serial.SerialException as e:
            print(f"[Simulator] Read error: {e}")
        finally:
            link.close()

        self._report_dropped()
        return True

    def _report_dropped(self):
        if self.reader.dropped:
            print(f"[Simulator] Dropped {self.reader.dropped} unframed bytes")
