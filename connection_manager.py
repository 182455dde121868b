import serial
import serial.tools.list_ports

import config


def find_device(name_contains=config.DEVICE_NAME):
    """Find a serial port whose name or description contains the given text."""
    needle = name_contains.lower()

    for port in serial.tools.list_ports.comports():
        names = [port.device, port.name, port.description, port.manufacturer, port.product]
        if any(name and needle in name.lower() for name in names):
            return port.device

    return None


class SerialLink:
    """Write-only serial link to the light controller."""

    def __init__(self, port=None, device_name=config.DEVICE_NAME, baud=config.BAUD_RATE):
        self.port = port  # Explicit port skips discovery
        self.device_name = device_name
        self.baud = baud

        self.serial_port = None
        self.connected = False

        # Callbacks
        self.on_connected = None
        self.on_disconnected = None

    def connect(self) -> bool:
        """Open the controller port. Missing device is not an error."""
        self.close()

        port = self.port or find_device(self.device_name)
        if not port:
            print(f"[Serial] No device matching '{self.device_name}' found")
            return False

        try:
            self.serial_port = serial.Serial(port, self.baud, timeout=1)
        except (serial.SerialException, OSError) as e:
            print(f"[Serial] Unable to open {port}: {e}")
            self.serial_port = None
            return False

        self.connected = True
        print(f"[Serial] Connected to {port} @ {self.baud} baud")

        if self.on_connected:
            self.on_connected(port)
        return True

    def send(self, packet: bytes) -> bool:
        """Write one packet. A failed write drops the packet and the link."""
        if not self.connected:
            return False

        try:
            self.serial_port.write(packet)
            return True
        except (serial.SerialException, OSError) as e:
            print(f"[Serial] Send error, disconnecting: {e}")
            self._mark_disconnected()
            return False

    def close(self):
        if self.serial_port is not None:
            try:
                self.serial_port.close()
            except (serial.SerialException, OSError) as e:
                print(f"[Serial] Close error: {e}")
            self.serial_port = None
        self.connected = False

    def _mark_disconnected(self):
        self.close()
        if self.on_disconnected:
            self.on_disconnected()
