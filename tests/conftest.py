import numpy as np
import pytest


class FakeLink:
    """Stands in for SerialLink, records every packet."""

    def __init__(self):
        self.connected = True
        self.packets = []

    def send(self, packet):
        self.packets.append(packet)
        return True


@pytest.fixture
def fake_link():
    return FakeLink()


@pytest.fixture
def red_frame():
    frame = np.zeros((64, 64, 3), dtype=np.uint8)
    frame[:, :, 0] = 255
    return frame


@pytest.fixture
def corner_points():
    return [(0.1, 0.1), (0.1, 0.9), (0.9, 0.9), (0.9, 0.1)]
