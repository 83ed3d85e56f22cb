#!/usr/bin/env python3
"""Mock presale timer API for local countdown development."""

import os
import sys
from datetime import datetime, timedelta, timezone

from flask import Flask, jsonify

app = Flask(__name__)

# Presale ends this many seconds after the mock server starts.
END_AFTER_SECONDS = int(os.getenv("MOCK_PRESALE_END_AFTER_SECONDS", "90"))
PRESALE_END = datetime.now(timezone.utc) + timedelta(seconds=END_AFTER_SECONDS)


@app.route("/api/presale", methods=["GET"])
def presale():
    """Return the presale end time."""
    return jsonify({"presaleEndTime": PRESALE_END.isoformat().replace("+00:00", "Z")})


@app.route("/healthz")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    print("Mock presale timer starting on http://0.0.0.0:19094", file=sys.stderr)
    app.run(host="0.0.0.0", port=19094, debug=False)
