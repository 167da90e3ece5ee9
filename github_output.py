# github_output.py
import json
import os
import sys
from typing import List, Optional

from theme_result import DetectionResult


def format_value(value) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(',', ':'))
    return '' if value is None else str(value)


class GitHubOutputWriter:
    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or os.getenv('GITHUB_OUTPUT')

    def is_configured(self) -> bool:
        return bool(self.path)

    def format_lines(self, result: DetectionResult) -> List[str]:
        return [f'{key}={format_value(value)}' for key, value in result.to_dict().items()]

    def write(self, result: DetectionResult) -> bool:
        # stdout carries the JSON result; problems go to stderr
        if not self.is_configured():
            print('Error: GitHub output not configured. Set GITHUB_OUTPUT or pass --github-output', file=sys.stderr)
            return False

        text = ''.join(f'{line}\n' for line in self.format_lines(result))
        try:
            with open(self.path, 'a', encoding='utf-8') as fh:
                fh.write(text)
            return True
        except OSError as e:
            print(f'Could not write GitHub output to {self.path}: {e}', file=sys.stderr)
            return False
