"""release-engine: conventional-commit driven release decisions.

Reads the commits since the last ``v<major>.<minor>.<patch>`` tag, decides
the next semantic version and renders a markdown changelog section.
"""

from __future__ import annotations

__version__ = "0.3.0"
