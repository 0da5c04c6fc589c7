"""
Firebase project creation and placeholder config files.

Project ids are global across Firebase, so a random suffix is tried up to
MAX_ATTEMPTS times. The placeholder files deny all Firestore access until
the loop replaces them.
"""

import json
import logging
import random
import re
import string
import subprocess
from pathlib import Path

from ralph.builder.scaffold import ScaffoldError

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 5
PROJECT_ID_MAX_LENGTH = 30
SUFFIX_LENGTH = 6
FIREBASE_TIMEOUT_SECONDS = 120

ALREADY_EXISTS_MARKERS = ("already exists", "409")

FIRESTORE_RULES = """// Placeholder - Ralph will update
service cloud.firestore {
  match /databases/{database}/documents {
    match /{document=**} {
      allow read, write: if false;
    }
  }
}
"""


def candidate_project_id(name: str, rng: random.Random | None = None) -> str:
    """<name>-<6 random chars>, sanitised and cut to the Firebase id limit."""
    rng = rng or random.Random()
    alphabet = string.ascii_lowercase + string.digits
    suffix = "".join(rng.choice(alphabet) for _ in range(SUFFIX_LENGTH))
    return re.sub(r"[^a-z0-9-]", "-", f"{name}-{suffix}")[:PROJECT_ID_MAX_LENGTH]


def _run_firebase(args: list[str], cwd: Path) -> subprocess.CompletedProcess:
    cmd = ["npx", "firebase"] + args + ["--non-interactive"]
    try:
        return subprocess.run(cmd, cwd=str(cwd), capture_output=True, text=True,
                              timeout=FIREBASE_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        raise ScaffoldError(f"firebase {args[0]} timed out after {FIREBASE_TIMEOUT_SECONDS}s") from None
    except FileNotFoundError:
        raise ScaffoldError("npx not found. Install Node.js: https://nodejs.org") from None


def create_firebase_project(name: str, cwd: Path, rng: random.Random | None = None) -> str:
    """
    Create a Firebase project with a unique id and return the id.

    Raises:
        ScaffoldError: if listing/creation fails for a reason other than a
            taken id, or no free id was found in MAX_ATTEMPTS tries
    """
    rng = rng or random.Random()

    for attempt in range(1, MAX_ATTEMPTS + 1):
        candidate = candidate_project_id(name, rng)

        listing = _run_firebase(["projects:list"], cwd)
        if listing.returncode != 0:
            raise ScaffoldError(f"firebase projects:list failed: {listing.stderr.strip()}")
        if candidate in listing.stdout:
            logger.debug(f"Firebase id {candidate} already taken (attempt {attempt})")
            continue

        created = _run_firebase(["projects:create", candidate], cwd)
        if created.returncode == 0:
            logger.info(f"Firebase project: {candidate}")
            return candidate

        output = created.stdout + created.stderr
        if any(marker in output for marker in ALREADY_EXISTS_MARKERS):
            logger.debug(f"Firebase id {candidate} already exists (attempt {attempt})")
            continue
        raise ScaffoldError(f"firebase projects:create failed: {output.strip()}")

    raise ScaffoldError("Failed to create unique Firebase ID")


def write_placeholders(project_dir: Path, name: str, project_id: str) -> list[Path]:
    """Write .firebaserc, firebase.json and the Firestore rule/index stubs."""
    files = {
        ".firebaserc": json.dumps({"projects": {"default": project_id}}, indent=2) + "\n",
        "firebase.json": json.dumps({
            "hosting": {
                "public": f"dist/{name}",
                "ignore": ["firebase.json", "**/.*", "**/node_modules/**"],
                "rewrites": [{"source": "**", "destination": "/index.html"}],
            },
            "firestore": {
                "rules": "firestore.rules",
                "indexes": "firestore.indexes.json",
            },
        }, indent=2) + "\n",
        "firestore.rules": FIRESTORE_RULES,
        "firestore.indexes.json": json.dumps({"indexes": []}) + "\n",
    }

    written = []
    for filename, content in files.items():
        path = project_dir / filename
        path.write_text(content)
        written.append(path)

    logger.info("Placeholder Firebase config files created")
    return written
