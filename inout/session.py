# inout/session.py
"""
Load and replay YAML inverse-cache sessions.

A session names a starting matrix and a list of steps. Each step either asks
for the inverse (``op: inverse``) or replaces the matrix (``op: set``).
Replaying a session shows which queries were served from the cache.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import yaml
from cerberus import Validator

from core.cacheable_matrix import CacheableMatrix
from core.caching_inverter import CachingInverter
from core.exceptions import SessionError
from utils.linops import METHODS
from utils.logging_config import get_logger

logger = get_logger(__name__)

MATRIX_SCHEMA = {
    'type': 'list',
    'minlength': 1,
    'schema': {
        'type': 'list',
        'minlength': 1,
        'schema': {'type': 'number'},
    },
}

SESSION_SCHEMA = {
    'method': {'type': 'string', 'required': False, 'allowed': list(METHODS)},
    'matrix': dict(MATRIX_SCHEMA, required=True),
    'steps': {
        'type': 'list',
        'required': False,
        'schema': {
            'type': 'dict',
            'schema': {
                'op': {'type': 'string', 'required': True, 'allowed': ['inverse', 'set']},
                'matrix': dict(MATRIX_SCHEMA, required=False),
            },
        },
    },
}


@dataclass
class SessionStep:
    op: str
    matrix: Optional[List[List[float]]] = None


@dataclass
class Session:
    matrix: List[List[float]]
    steps: List[SessionStep] = field(default_factory=lambda: [SessionStep('inverse')])
    method: str = 'lu'


@dataclass
class StepResult:
    op: str
    inverse: Optional[np.ndarray] = None
    cached: bool = False


def _check_matrix(matrix: List[List[float]], where: str) -> None:
    widths = {len(row) for row in matrix}
    if len(widths) != 1:
        raise SessionError(f"{where}: matrix rows have different lengths {sorted(widths)}")
    if not np.all(np.isfinite(np.array(matrix, dtype=float))):
        raise SessionError(f"{where}: matrix entries must be finite")


def session_from_dict(raw: Any) -> Session:
    """
    Validate a decoded session document and build a Session.

    Raises:
        SessionError: On schema errors, a 'set' step without a matrix, or a
            ragged or non-finite matrix.
    """
    validator = Validator(SESSION_SCHEMA, allow_unknown=False)
    if not isinstance(raw, dict) or not validator.validate(raw):
        errors = validator.errors if isinstance(raw, dict) else "document is not a mapping"
        logger.error("Session schema validation errors: %s", errors)
        raise SessionError(f"Session schema validation failed: {errors}")
    doc: Dict[str, Any] = validator.document
    _check_matrix(doc['matrix'], 'matrix')

    steps: List[SessionStep] = []
    for i, entry in enumerate(doc.get('steps') or [{'op': 'inverse'}]):
        if entry['op'] == 'set':
            if 'matrix' not in entry:
                raise SessionError(f"Step {i}: 'set' requires a matrix")
            _check_matrix(entry['matrix'], f"Step {i}")
        steps.append(SessionStep(op=entry['op'], matrix=entry.get('matrix')))

    return Session(matrix=doc['matrix'], steps=steps, method=doc.get('method', 'lu'))


def load_session(path: Union[str, Path]) -> Session:
    """
    Read a YAML session file.

    Raises:
        SessionError: If the file cannot be read or fails validation.
    """
    try:
        raw = yaml.safe_load(Path(path).read_text())
    except (OSError, yaml.YAMLError) as e:
        raise SessionError(f"Failed to read session YAML '{path}': {e}") from e
    return session_from_dict(raw)


def run_session(session: Session, inverter: Optional[CachingInverter] = None) -> List[StepResult]:
    """
    Replay a session against a single CacheableMatrix.

    Inversion errors (e.g. SingularMatrixError) propagate to the caller.
    """
    inverter = inverter or CachingInverter()
    obj = CacheableMatrix(np.array(session.matrix, dtype=float))
    results: List[StepResult] = []

    for step in session.steps:
        if step.op == 'set':
            obj.set_current(np.array(step.matrix, dtype=float))
            logger.debug("Matrix replaced: %s", obj)
            results.append(StepResult(op='set'))
            continue
        cached = inverter.is_cache_valid(obj)
        inverse = inverter.compute_inverse(obj, method=session.method)
        results.append(StepResult(op='inverse', inverse=inverse, cached=cached))

    return results
