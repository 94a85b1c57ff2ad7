# Copyright (c) fsusage-analyzer Contributors.

"""Every Python source file carries the project copyright line."""

import unittest
from pathlib import Path

HEADER = "# Copyright (c) fsusage-analyzer Contributors."
ROOT = Path(__file__).resolve().parent.parent


class TestCopyrightHeaders(unittest.TestCase):
    def test_every_source_file_has_header(self):
        sources = [ROOT / "setup.py"]
        sources += sorted((ROOT / "fsusage").rglob("*.py"))
        sources += sorted((ROOT / "tests").rglob("*.py"))
        for path in sources:
            with self.subTest(path=path.relative_to(ROOT)):
                first_line = path.read_text(encoding="utf-8").splitlines()[0]
                self.assertEqual(first_line, HEADER)


if __name__ == "__main__":
    unittest.main()
