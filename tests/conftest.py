"""Test configuration and shared fixtures for devdoc tests.

Provides temporary directories, a factory writing devhelp2 documentation
sets to disk, and isolation of the configuration singleton.
"""

import pytest
import tempfile
import shutil
import logging
from pathlib import Path
from typing import Callable, Optional

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from devdoc.config import ConfigManager
from devdoc.core.extension import DevdocExtension

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


SAMPLE_BOOK = '''<?xml version="1.0" encoding="utf-8"?>
<book xmlns="http://www.devhelp.net/book" title="GLib Reference Manual"
      name="glib" base="/usr/share/gtk-doc/html/glib" link="index.html" version="2" language="c">
  <chapters>
    <sub name="GLib Overview" link="glib.html">
      <sub name="Compiling the GLib package" link="glib-building.html"/>
      <sub name="Running GLib Applications" link="glib-running.html"/>
    </sub>
    <!-- fundamentals -->
    <sub name="GLib Fundamentals" link="glib-fundamentals.html">
      <sub name="Version Information" link="glib-Version-Information.html"/>
    </sub>
  </chapters>
  <functions>
    <keyword type="macro" name="GLIB_MAJOR_VERSION" link="glib-Version-Information.html#GLIB-MAJOR-VERSION:CAPS"/>
    <keyword type="function" name="glib_check_version ()" link="glib-Version-Information.html#glib-check-version"/>
    <keyword type="macro" name="GLIB_CHECK_VERSION()" link="glib-Version-Information.html#GLIB-CHECK-VERSION:CAPS"/>
    <keyword type="struct" name="GList" link="glib-Doubly-Linked-Lists.html#GList"/>
  </functions>
</book>
'''


@pytest.fixture
def temp_dir():
    """Creates a temporary directory for test operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def make_doc_set(temp_dir) -> Callable[..., Path]:
    """Factory writing ``<name>/<name>.devhelp2`` under the temp directory.

    Returns the documentation set directory.
    """
    def _make(name: str, content: Optional[str] = SAMPLE_BOOK, index_name: Optional[str] = None) -> Path:
        directory = temp_dir / name
        directory.mkdir(parents=True, exist_ok=True)
        if content is not None:
            (directory / (index_name or f"{name}.devhelp2")).write_text(content, encoding="utf-8")
        return directory

    return _make


@pytest.fixture
def extension():
    """Creates an extension using built-in defaults; closed after the test."""
    ext = DevdocExtension(settings={})
    yield ext
    ext.close()


@pytest.fixture(autouse=True)
def reset_singletons(temp_dir, monkeypatch):
    """Isolate the configuration singleton from the user's own overrides."""
    monkeypatch.setenv("DEVDOC_CONFIG_DIR", str(temp_dir / "user-config"))
    ConfigManager.reset()
    yield
    ConfigManager.reset()


def _book(chapters: str = "", functions: Optional[str] = None, title: str = "X", base: Optional[str] = "/docs") -> str:
    base_attr = f' base="{base}"' if base is not None else ""
    functions_xml = f"<functions>{functions}</functions>" if functions is not None else ""
    return (
        f'<?xml version="1.0"?>\n<book title="{title}"{base_attr}>'
        f"<chapters>{chapters}</chapters>{functions_xml}</book>"
    )


@pytest.fixture
def book() -> Callable[..., str]:
    """Builds the text of a minimal devhelp2 document."""
    return _book
