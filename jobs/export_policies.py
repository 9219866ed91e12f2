# jobs/export_policies.py

import json
import sys

from core.policy import describe_policies


def run(out=None):
    """
    CLI entry point for the policy matrix export (audit / documentation).
    Usage: python -m jobs.export_policies > policies.json
    """
    out = out or sys.stdout
    json.dump(describe_policies(), out, indent=2)
    out.write("\n")


if __name__ == "__main__":
    run()
