import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Isolated directory for decode temp files; tests assert it ends up empty."""
    path = tmp_path / "waveform-tmp"
    path.mkdir()
    return path


@pytest.fixture
def audio_file(tmp_path) -> Path:
    path = tmp_path / "Morning Show.MP3"
    path.write_bytes(b"\xff\xfb" * 1000)
    return path
