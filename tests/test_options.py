"""
Tests for ViewBox, CodecOptions and the configuration loader.
"""

import tempfile
import unittest
from pathlib import Path

from keyframesvg import CodecOptions, ConfigurationError, Frame, ViewBox
from keyframesvg.frame import format_length
from keyframesvg.options import create_default_config, load_config


class TestViewBox(unittest.TestCase):
    """Tests for viewBox parsing and formatting."""

    def test_from_text(self):
        self.assertEqual(ViewBox.from_text("0 0 64 64"), ViewBox(0, 0, 64, 64))
        self.assertEqual(ViewBox.from_text("0,0, 10.5 20"), ViewBox(0, 0, 10.5, 20))
        self.assertEqual(ViewBox.from_text("1 2"), ViewBox(1, 2, 0, 0))

    def test_from_text_rejects_words(self):
        with self.assertRaises(ValueError):
            ViewBox.from_text("0 0 wide tall")

    def test_str(self):
        self.assertEqual(str(ViewBox(0, 0, 64, 64)), "0 0 64 64")
        self.assertEqual(str(ViewBox(-1.5, 0, 10, 2.25)), "-1.5 0 10 2.25")

    def test_format_length(self):
        self.assertEqual(format_length(64), "64px")
        self.assertEqual(format_length(12.9), "12px")
        self.assertEqual(format_length("3em"), "3em")


class TestCodecOptions(unittest.TestCase):
    """Tests for per-call overrides."""

    def test_from_dict(self):
        options = CodecOptions.from_dict({"viewbox": "0 0 8 8", "duration": "0.5", "width": None})
        self.assertEqual(options.viewbox, ViewBox(0, 0, 8, 8))
        self.assertEqual(options.duration, 0.5)
        self.assertIsNone(options.width)

        self.assertEqual(CodecOptions.from_dict({"viewbox": [0, 0, 4, 2]}).viewbox, ViewBox(0, 0, 4, 2))
        self.assertEqual(CodecOptions.from_dict(None), CodecOptions())

    def test_from_dict_rejects_bad_values(self):
        for values in ({"colour": "red"}, {"duration": "slow"}, {"namespaces": ["svg"]}):
            with self.subTest(values=values):
                with self.assertRaises(ConfigurationError):
                    CodecOptions.from_dict(values)

    def test_apply_copies(self):
        frame = Frame(width="64px", duration=0.1, namespaces={None: "urn:a"})
        options = CodecOptions(duration=2.0, namespaces={"x": "urn:x"})

        applied = options.apply(frame)

        self.assertEqual(applied.duration, 2.0)
        self.assertEqual(applied.width, "64px")
        self.assertEqual(applied.namespaces, {None: "urn:a", "x": "urn:x"})
        self.assertEqual(frame.duration, 0.1)
        self.assertEqual(frame.namespaces, {None: "urn:a"})

    def test_choose(self):
        options = CodecOptions(height=0)
        self.assertEqual(options.choose("height", "64px"), 0)
        self.assertEqual(options.choose("width", "64px"), "64px")


class TestConfig(unittest.TestCase):
    """Tests for the YAML configuration loader."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.path = Path(self.temp_dir.name) / "config.yaml"

    def tearDown(self):
        """Clean up after tests."""
        self.temp_dir.cleanup()

    def test_defaults(self):
        self.assertEqual(load_config(None), create_default_config())

    def test_merges_over_defaults(self):
        self.path.write_text("animation:\n  loops: 2\noptions:\n  duration: 0.5\n", encoding="utf-8")

        config = load_config(self.path)

        self.assertEqual(config["animation"]["loops"], 2)
        self.assertIsNone(config["animation"]["skip_first"])
        self.assertEqual(config["options"]["duration"], 0.5)
        self.assertIsNone(config["options"]["width"])

    def test_invalid_files_raise(self):
        for text in ("- a\n- b\n", "colours: {}\n", "options: 3\n", "options: [\n"):
            with self.subTest(text=text):
                self.path.write_text(text, encoding="utf-8")
                with self.assertRaises(ConfigurationError):
                    load_config(self.path)

    def test_missing_file_raises(self):
        with self.assertRaises(ConfigurationError):
            load_config(Path(self.temp_dir.name) / "missing.yaml")


if __name__ == '__main__':
    unittest.main()
