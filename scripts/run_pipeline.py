from __future__ import annotations

import json
import subprocess
import sys


def main():
    task_id = "demo-task"
    subprocess.run(
        [
            sys.executable,
            "-m",
            "agentdesk.entrypoints.cli",
            "Please format the launch note",
            "--task-id",
            task_id,
            "--role",
            "manager",
            "--tool",
            "doc.format",
            "--args",
            json.dumps({"input": "Launch note", "style": "formal"}),
        ],
        check=True,
    )


if __name__ == "__main__":
    main()
