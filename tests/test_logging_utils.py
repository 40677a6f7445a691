"""Run log tests."""

import tempfile
import unittest
from pathlib import Path

from rtfgen.logging_utils import log_event, read_events


class TestRunLog(unittest.TestCase):
    def test_events_append_in_order(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_path = Path(temp_dir) / "run" / "run_log.jsonl"
            log_event(log_path, "FIRST", {"count": 1})
            log_event(log_path, "SECOND")
            events = read_events(log_path)
        self.assertEqual([e["event_type"] for e in events], ["FIRST", "SECOND"])
        self.assertEqual(events[0]["payload"], {"count": 1})
        self.assertEqual(events[1]["payload"], {})
        self.assertTrue(events[0]["timestamp"].endswith("Z"))


if __name__ == "__main__":
    unittest.main()
