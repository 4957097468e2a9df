"""
Tests for the command line interface.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from keyframesvg import Document
from keyframesvg.cli import main, parse_args
from samples import write_samples


class TestCLI(unittest.TestCase):
    """Tests for the keyframesvg command."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)
        write_samples(self.dir, 4)
        self.output = self.dir / "out" / "animation.svg"

    def tearDown(self):
        """Clean up after tests."""
        self.temp_dir.cleanup()

    def test_parse_args(self):
        args = parse_args(["a.svg", "b.svg", "-o", "out.svg", "--loops", "2"])
        self.assertEqual(args.inputs, ["a.svg", "b.svg"])
        self.assertEqual(args.loops, 2)
        self.assertIsNone(args.skip_first)
        self.assertIsNone(args.duration)

    def test_build_animation(self):
        code = main([str(self.dir / "*.svg"), "-o", str(self.output),
                     "--loops", "2", "--duration", "0.25"])

        self.assertEqual(code, 0)
        document = Document(self.output)
        self.assertEqual(len(document.frames), 4)
        self.assertEqual(document.loops, 2)
        self.assertFalse(document.skip_first)
        self.assertEqual([f.duration for f in document.frames], [0.25] * 4)

    def test_skip_first_and_split(self):
        split_dir = self.dir / "split"
        code = main([str(self.dir / "*.svg"), "-o", str(self.output),
                     "--skip-first", "--split", str(split_dir)])

        self.assertEqual(code, 0)
        self.assertTrue(Document(self.output).skip_first)
        self.assertEqual(sorted(p.name for p in split_dir.iterdir()),
                         ["0.svg", "1.svg", "2.svg", "3.svg"])
        self.assertFalse(Document(split_dir / "2.svg").has_animation)

    def test_config_file(self):
        config = self.dir / "config.yaml"
        config.write_text("animation:\n  loops: 5\noptions:\n  width: 32px\n", encoding="utf-8")

        code = main([str(self.dir / "0.svg"), str(self.dir / "1.svg"),
                     "-o", str(self.output), "--config", str(config)])

        self.assertEqual(code, 0)
        document = Document(self.output)
        self.assertEqual(document.loops, 5)
        self.assertEqual(document.frames[0].width, "32px")

    def test_missing_input_fails(self):
        code = main([str(self.dir / "missing*.svg"), "-o", str(self.output)])
        self.assertEqual(code, 1)
        self.assertFalse(self.output.exists())

    def test_nothing_written_fails(self):
        with patch('keyframesvg.cli.Document.save_svg', return_value=0):
            code = main([str(self.dir / "0.svg"), "-o", str(self.output)])
        self.assertEqual(code, 1)


if __name__ == '__main__':
    unittest.main()
