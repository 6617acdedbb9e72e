"""
conftest.py - Shared pytest fixtures for SlowFast tests

This module provides standardized test fixtures for use across all SlowFast tests.
It includes fixtures for:
- Path setup and Python path configuration
- Configuration management
- Curves, coordinate mappers and edit sessions
- A controllable clock for the simulated time sources
- GUI testing support
"""
import os
import sys
import json
import pathlib
import pytest

# Add the src/python directory to the Python path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src" / "python"))

# Qt widgets are created without a display in CI
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Imports from SlowFast modules (now that path is configured)
from config_manager import ConfigManager
from coordinate_mapper import CoordinateMapper
from curve_model import CurveModel
from edit_session import EditSession, point_geometry


# Path and Environment Fixtures
# ----------------------------

@pytest.fixture
def slowfast_paths():
    """Provide standard paths to key SlowFast directories."""
    root_dir = pathlib.Path(__file__).parent.parent
    return {
        'root': root_dir,
        'src': root_dir / 'src',
        'python': root_dir / 'src' / 'python',
        'config': root_dir / 'config',
        'tests': root_dir / 'tests'
    }


# Configuration Fixtures
# ---------------------

@pytest.fixture
def test_config_data(tmp_path):
    """Create minimal test configuration data."""
    return {
        "colors": {
            "palette": {
                "background": "#2b2b2b",
                "textColor": "#aaaaaa",
                "curve": "#ca0347"
            },
            "fonts": {
                "primary": "Arial"
            }
        },
        "strings": {
            "ui": {
                "windowTitle": "SlowFast Test",
                "fastLabel": "FAST",
                "slowLabel": "SLOW"
            },
            "menus": {
                "file": "File"
            }
        },
        "ui": {
            "canvas": {
                "width": 400,
                "height": 200,
                "handleRadius": 10,
                "ghostRadius": 8,
                "labelSpacer": 5,
                "curveSamples": 50
            },
            "gestures": {
                "longPressMs": 500,
                "longPressSlop": 4
            },
            "frameLoop": {
                "intervalMs": 20
            }
        },
        "curve": {
            "easing": "identity",
            "minPointGap": 0.01,
            "defaultPoints": [[0, 0], [0.5, 0], [1, 0]]
        },
        "playback": {
            "maxSpeed": 6,
            "timeSource": "simulated",
            "simulatedDurationMs": 1000,
            "enforceTrim": True,
            "videoPath": ""
        },
        "logging": {
            "level": "DEBUG",
            "file": str(tmp_path / "logs" / "test.log"),
            "maxBytes": 65536,
            "backupCount": 1,
            "console": False,
            "raiseOnError": False
        }
    }


@pytest.fixture
def test_config_file(tmp_path, test_config_data):
    """Write the test configuration to a temporary config.json."""
    config_file = tmp_path / "test_config.json"
    with open(config_file, 'w') as f:
        json.dump(test_config_data, f)
    return config_file


@pytest.fixture
def test_config_manager(test_config_file):
    """Create a ConfigManager instance with test configuration."""
    return ConfigManager(cfg_path=test_config_file, exit_on_error=False)


# Curve Fixtures
# --------------

@pytest.fixture
def mapper():
    """A 600x300 viewport."""
    return CoordinateMapper(600, 300)


@pytest.fixture
def flat_curve():
    """The default four point curve with linear segments."""
    from easing import identity
    return CurveModel(easing=identity)


@pytest.fixture
def edit_session(flat_curve, mapper):
    """An edit session hit-testing against handles computed from the curve."""
    return EditSession(flat_curve, mapper, lambda: point_geometry(flat_curve, mapper, 11))


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def fake_clock():
    return FakeClock()


# GUI Testing Fixtures
# ------------------

@pytest.fixture(scope="session")
def qt_app():
    """Create a QApplication instance that persists for the test session."""
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:
        pytest.skip("PyQt6 not installed, skipping test")

    # Check if an instance already exists
    app = QApplication.instance()
    if app is None:
        # Create a new application with dummy arguments
        app = QApplication([''])

    yield app
