import json
import os
from datetime import datetime, timezone

class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="busybeaver_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        if not entries:
            return
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single generator or search event."""
        self.log_batch([entry])

    def log_batch(self, entries: list):
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log_halting(self, entries: list):
        """Log candidates that halted within the step budget."""
        self._log_to_file(f"halting_{self.today}.jsonl", entries)

    def log_non_halting(self, entries: list):
        """Log candidates that ran out of steps."""
        self._log_to_file(f"non_halting_{self.today}.jsonl", entries)
