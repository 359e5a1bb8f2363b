#!/usr/bin/env python3
"""
Validate a note event log written by JsonlSink.
Checks that each line is a well-formed note event and that every
note-off releases a note that was switched on earlier.
"""

import sys
from pathlib import Path
import json

REQUIRED_FIELDS = {
    "note_on": {"channel", "note", "velocity"},
    "note_off": {"channel", "note"},
}


def validate_event_logs(log_file="logs/events.jsonl"):
    """Validate event log format and note pairing."""
    log_path = Path(log_file)
    if not log_path.exists():
        print(f"✗ Event log {log_file} does not exist")
        return 1

    sounding = {}
    valid_lines = 0
    try:
        with open(log_path, 'r') as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:  # Skip empty lines
                    continue
                record = json.loads(line)

                kind = record.get("type")
                if kind not in REQUIRED_FIELDS:
                    print(f"✗ Line {line_no}: unknown event type {kind!r}")
                    return 1

                missing = REQUIRED_FIELDS[kind] - record.keys()
                if missing:
                    print(f"✗ Line {line_no}: missing fields {sorted(missing)}")
                    return 1

                if not 0 <= record["note"] <= 127:
                    print(f"✗ Line {line_no}: note {record['note']} out of range")
                    return 1

                key = (record["channel"], record["note"])
                if kind == "note_on":
                    sounding[key] = sounding.get(key, 0) + 1
                elif sounding.get(key, 0) == 0:
                    print(f"✗ Line {line_no}: note_off for note {record['note']} that is not sounding")
                    return 1
                else:
                    sounding[key] -= 1

                valid_lines += 1

    except json.JSONDecodeError as e:
        print(f"✗ Invalid JSON in event log: {e}")
        return 1

    print(f"✓ Validated {valid_lines} event log entries")
    still_on = sum(sounding.values())
    if still_on:
        print(f"⚠ {still_on} notes still sounding at end of log")
    return 0


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser()
    parser.add_argument("log_file", nargs='?', default="logs/events.jsonl")

    args = parser.parse_args()
    exit_code = validate_event_logs(args.log_file)
    sys.exit(exit_code)
