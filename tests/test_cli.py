import subprocess
import sys
from pathlib import Path

import yaml

REPO_ROOT = Path(__file__).resolve().parent.parent

def _run(*args):
    cmd = [sys.executable, "run_inverse.py", *args]
    return subprocess.run(cmd, capture_output=True, text=True, cwd=REPO_ROOT)

def test_cli_smoke(tmp_path):
    session = {
        "matrix": [[2, 0], [0, 2]],
        "steps": [
            {"op": "inverse"},
            {"op": "inverse"},
            {"op": "set", "matrix": [[1, 0], [0, 1]]},
            {"op": "inverse"},
        ],
    }
    session_file = tmp_path / "session.yml"
    with open(session_file, "w") as f:
        yaml.dump(session, f)

    proc = _run("--session", str(session_file), "--verify")
    output = proc.stdout + proc.stderr
    assert proc.returncode == 0, output
    assert "returning newly computed inverse" in output
    assert "returning cached inverse" in output
    assert "Step 1: inverse (cached)" in output
    assert "Session completed: 4 steps, 1 cache hits" in output
    assert "is not the identity" not in output

def test_cli_singular_matrix_fails(tmp_path):
    session_file = tmp_path / "session.yml"
    with open(session_file, "w") as f:
        yaml.dump({"matrix": [[1, 2], [2, 4]]}, f)

    proc = _run("--session", str(session_file))
    assert proc.returncode == 1
    assert "Session failed" in proc.stderr

def test_cli_non_finite_matrix_fails(tmp_path):
    session_file = tmp_path / "session.yml"
    session_file.write_text("matrix: [[.nan, 0], [0, 1]]\n")

    proc = _run("--session", str(session_file))
    assert proc.returncode == 1
    assert "Session failed" in proc.stderr
    assert "Traceback" not in proc.stderr

def test_cli_computationally_singular_matrix_fails(tmp_path):
    session_file = tmp_path / "session.yml"
    with open(session_file, "w") as f:
        yaml.dump({"matrix": [[0.1, 0.2, 0.3], [0.4, 0.5, 0.6], [0.7, 0.8, 0.9]]}, f)

    proc = _run("--session", str(session_file))
    assert proc.returncode == 1
    assert "computationally singular" in proc.stderr
