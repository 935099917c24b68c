# tests/test_packaging.py
"""
Testes dos metadados de empacotamento do TRP Config.

Invariantes:
    - A descrição publicada do pacote nunca aponta para documentos
      internos de projeto (SPEC_FULL.md, DESIGN.md, TRIAGE.md)
"""

import re
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]
_INTERNAL_DOCS = {"SPEC_FULL.md", "DESIGN.md", "TRIAGE.md", "spec.md"}


def test_readme_is_not_an_internal_document():
    text = (ROOT / "pyproject.toml").read_text(encoding="utf-8")
    readmes = re.findall(r'^readme\s*=\s*"([^"]+)"', text, flags=re.MULTILINE)

    for readme in readmes:
        assert readme not in _INTERNAL_DOCS
        assert (ROOT / readme).is_file()
