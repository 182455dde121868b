from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import serial

import connection_manager
from connection_manager import SerialLink, find_device


def make_port(device, description="", manufacturer=None):
    return SimpleNamespace(
        device=device, name=device, description=description,
        manufacturer=manufacturer, product=None,
    )


PORTS = [
    make_port("/dev/ttyS0", "ttyS0"),
    make_port("/dev/ttyACM0", "Arduino Uno", "Arduino (www.arduino.cc)"),
]


@patch("connection_manager.serial.tools.list_ports.comports", return_value=PORTS)
def test_find_device_by_name(_comports):
    assert find_device("Arduino") == "/dev/ttyACM0"
    assert find_device("arduino") == "/dev/ttyACM0"
    assert find_device("Teensy") is None


@patch("connection_manager.serial.tools.list_ports.comports", return_value=[])
def test_missing_device_is_not_an_error(_comports):
    link = SerialLink()

    assert link.connect() is False
    assert link.connected is False
    assert link.send(b"GLOW") is False


@patch("connection_manager.serial.Serial")
def test_connect_and_send(serial_cls):
    port = MagicMock()
    serial_cls.return_value = port

    link = SerialLink(port="/dev/ttyUSB0")
    assert link.connect() is True
    serial_cls.assert_called_once_with("/dev/ttyUSB0", 9600, timeout=1)

    assert link.send(b"GLOW\x00") is True
    port.write.assert_called_once_with(b"GLOW\x00")


@patch("connection_manager.serial.Serial")
def test_write_failure_drops_link(serial_cls):
    port = MagicMock()
    port.write.side_effect = serial.SerialException("device unplugged")
    serial_cls.return_value = port

    link = SerialLink(port="/dev/ttyUSB0")
    disconnected = MagicMock()
    link.on_disconnected = disconnected
    link.connect()

    assert link.send(b"GLOW") is False
    assert link.connected is False
    disconnected.assert_called_once()

    assert link.send(b"GLOW") is False
    assert port.write.call_count == 1


@patch("connection_manager.serial.Serial", side_effect=serial.SerialException("busy"))
def test_open_failure(_serial_cls):
    link = SerialLink(port="/dev/ttyUSB0")
    assert link.connect() is False
    assert link.serial_port is None


def test_module_uses_default_baud():
    assert SerialLink().baud == connection_manager.config.BAUD_RATE == 9600
