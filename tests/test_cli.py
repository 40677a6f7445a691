"""CLI tests."""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from rtfgen.builders import Rtf, font, p
from rtfgen.cli import build_parser, cmd_check, cmd_fill, cmd_render
from rtfgen.logging_utils import read_events
from rtfgen.render.writer import render_document


class MockArgs:
    """Mock argparse.Namespace for testing."""
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)


def _run(command, args) -> tuple:
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        result = command(args)
    return result, buffer.getvalue()


class TestParser(unittest.TestCase):
    def test_subcommands(self) -> None:
        parser = build_parser()
        self.assertEqual(parser.parse_args(["render", "--document", "d.json"]).command, "render")
        args = parser.parse_args(["fill", "--template", "t.rtf", "--values", "v.json", "--prefix", "<<"])
        self.assertEqual((args.command, args.prefix, args.suffix), ("fill", "<<", None))
        self.assertEqual(parser.parse_args(["check", "--document", "d.json"]).func, cmd_check)


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.root = Path(self._temp_dir.name)

    def tearDown(self) -> None:
        self._temp_dir.cleanup()

    def _write_document(self, document) -> Path:
        path = self.root / "document.json"
        path.write_text(document.to_json(), encoding="utf-8")
        return path

    def test_render_command_missing_document(self) -> None:
        args = MockArgs(project_root=str(self.root), document="/nonexistent/path.json", run_id=None)
        result, output = _run(cmd_render, args)
        self.assertEqual(result, 1)
        self.assertIn("ERROR:", output)

    def test_render_command_writes_artifacts(self) -> None:
        document = Rtf.rtf().info(title="Zoë").p("Hello {World}").build()
        args = MockArgs(project_root=str(self.root), document=str(self._write_document(document)), run_id="run_1")
        result, _ = _run(cmd_render, args)
        self.assertEqual(result, 0)

        run_dir = self.root / "runs" / "run_1"
        self.assertEqual((run_dir / "document.rtf").read_bytes().decode("cp1252"), render_document(document))
        report = json.loads((run_dir / "validation_report.json").read_text(encoding="utf-8"))
        self.assertEqual(report["violations"], [])
        events = [event["event_type"] for event in read_events(run_dir / "run_log.jsonl")]
        self.assertEqual(events, ["DOCUMENT_LOADED", "VALIDATE_DONE", "RENDER_DONE"])

    def test_fill_command_with_output(self) -> None:
        template = self.root / "letter.rtf"
        template.write_bytes(b"{\\rtf1 Dear %%NAME%%, %%MISSING%%}")
        values = self.root / "values.json"
        values.write_text(json.dumps({"NAME": "Anna {A}"}), encoding="utf-8")
        output = self.root / "out" / "letter.rtf"

        args = MockArgs(
            project_root=str(self.root), template=str(template), values=str(values),
            output=str(output), prefix=None, suffix=None, run_id=None,
        )
        result, _ = _run(cmd_fill, args)
        self.assertEqual(result, 0)
        self.assertEqual(output.read_bytes(), b"{\\rtf1 Dear Anna \\{A\\}, %%MISSING%%}")
        self.assertEqual(read_events(output.parent / "run_log.jsonl")[0]["event_type"], "FILL_DONE")

    def test_fill_command_uses_configured_delimiters(self) -> None:
        (self.root / "rtfgen.json").write_text(
            json.dumps({"template_prefix": "<<", "template_suffix": ">>"}), encoding="utf-8"
        )
        template = self.root / "t.rtf"
        template.write_bytes(b"<<X>> %%X%%")
        values = self.root / "v.json"
        values.write_text(json.dumps({"X": 1}), encoding="utf-8")

        args = MockArgs(
            project_root=str(self.root), template=str(template), values=str(values),
            output=None, prefix=None, suffix=None, run_id="fill_run",
        )
        result, _ = _run(cmd_fill, args)
        self.assertEqual(result, 0)
        self.assertEqual((self.root / "runs" / "fill_run" / "filled.rtf").read_bytes(), b"1 %%X%%")

    def test_fill_command_rejects_non_object_values(self) -> None:
        template = self.root / "t.rtf"
        template.write_bytes(b"%%X%%")
        values = self.root / "v.json"
        values.write_text("[1, 2]", encoding="utf-8")
        args = MockArgs(
            project_root=str(self.root), template=str(template), values=str(values),
            output=None, prefix=None, suffix=None, run_id=None,
        )
        result, output = _run(cmd_fill, args)
        self.assertEqual(result, 1)
        self.assertIn("ERROR:", output)

    def test_check_command(self) -> None:
        clean = self._write_document(Rtf.rtf().p("x").build())
        self.assertEqual(_run(cmd_check, MockArgs(document=str(clean)))[0], 0)

        dangling = self._write_document(Rtf.rtf().section(p(font(3, "x"))).build())
        result, output = _run(cmd_check, MockArgs(document=str(dangling)))
        self.assertEqual(result, 1)
        self.assertIn("UNKNOWN_FONT 3", output)


if __name__ == "__main__":
    unittest.main()
