"""Tests for the command line entry point."""
import io
import tempfile
import unittest
import zipfile
from pathlib import Path

from office_markdown.errors import UnsupportedFormatError
from office_markdown.main import convert_files, format_for_path, main

DOCUMENT = (
    '<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main">'
    "<w:body><w:p><w:r><w:t>{}</w:t></w:r></w:p></w:body></w:document>"
)


def write_docx(path: Path, text: str) -> Path:
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("word/document.xml", DOCUMENT.format(text))
    return path


class FormatDetectionTest(unittest.TestCase):
    def test_suffixes(self) -> None:
        self.assertEqual(format_for_path(Path("a.DOCX")), "word")
        self.assertEqual(format_for_path(Path("deck.pptx")), "powerpoint")
        self.assertEqual(format_for_path(Path("template.potx")), "powerpoint")

    def test_forced_format_wins(self) -> None:
        self.assertEqual(format_for_path(Path("notes.bin"), "word"), "word")

    def test_unknown_suffix(self) -> None:
        with self.assertRaises(UnsupportedFormatError):
            format_for_path(Path("sheet.xlsx"))


class ConvertFilesTest(unittest.TestCase):
    """Batch conversion into files or a shared stream."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_output_dir_receives_one_file_per_input(self) -> None:
        first = write_docx(self.root / "first.docx", "One")
        second = write_docx(self.root / "second.docx", "Two")
        out = self.root / "out"

        failed = convert_files([first, second], output_dir=out)

        self.assertEqual(failed, [])
        self.assertEqual((out / "first.md").read_text(encoding="utf-8"), "One\n")
        self.assertEqual((out / "second.md").read_text(encoding="utf-8"), "Two\n")

    def test_stream_output_separates_inputs(self) -> None:
        first = write_docx(self.root / "first.docx", "One")
        second = write_docx(self.root / "second.docx", "Two")
        sink = io.BytesIO()

        failed = convert_files([first, second], stdout=sink)

        self.assertEqual(failed, [])
        self.assertEqual(sink.getvalue(), b"One\n\nTwo\n")

    def test_failures_do_not_stop_the_batch(self) -> None:
        broken = self.root / "broken.docx"
        broken.write_bytes(b"not a zip")
        missing = self.root / "missing.docx"
        unknown = self.root / "data.csv"
        unknown.write_text("a,b", encoding="utf-8")
        good = write_docx(self.root / "good.docx", "Fine")
        out = self.root / "out"

        with self.assertLogs("office_markdown.main", level="ERROR"):
            failed = convert_files([broken, missing, unknown, good], output_dir=out)

        self.assertEqual(failed, [broken, missing, unknown])
        self.assertEqual((out / "good.md").read_text(encoding="utf-8"), "Fine\n")

    def test_debug_dir_collects_part_dumps(self) -> None:
        source = write_docx(self.root / "report.docx", "Dump me")
        debug_dir = self.root / "debug"

        convert_files([source], output_dir=self.root / "out", debug_dir=debug_dir)

        self.assertTrue((debug_dir / "report" / "word_document.xml.json").is_file())

    def test_main_exit_codes(self) -> None:
        good = write_docx(self.root / "ok.docx", "Fine")
        out = self.root / "out"
        self.assertEqual(main([str(good), "--output-dir", str(out)]), 0)

        broken = self.root / "bad.docx"
        broken.write_bytes(b"nope")
        with self.assertLogs("office_markdown.main", level="ERROR"):
            self.assertEqual(main([str(broken), "--output-dir", str(out)]), 1)

    def test_main_forced_format(self) -> None:
        source = write_docx(self.root / "export.bin", "Forced")
        out = self.root / "out"
        self.assertEqual(main(["--format", "word", "--output-dir", str(out), str(source)]), 0)
        self.assertEqual((out / "export.md").read_text(encoding="utf-8"), "Forced\n")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
