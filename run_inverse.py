#!/usr/bin/env python
import argparse
import logging
import sys

import numpy as np

from core.exceptions import CacheMatrixError
from inout.session import load_session, run_session
from utils.linops import is_identity
from utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)

def main() -> int:
    """
    Replay a YAML inverse-cache session and print every inverse.

    Command-line arguments:
      --session: Path to the YAML session file.
      --verify: Print A @ A^-1 for each inverse and check it against the identity.
      --log-file: Optional path that receives a copy of the log.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Replay a cached matrix inverse session.")
    parser.add_argument("--session", required=True, help="Path to the YAML session file.")
    parser.add_argument("--verify", action="store_true", help="Check A @ A^-1 against the identity.")
    parser.add_argument("--log-file", help="Also write log records to this file.", default=None)
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)
    logger.debug("Verbose logging enabled.")

    try:
        session = load_session(args.session)
        results = run_session(session)
    except CacheMatrixError as e:
        logger.error("Session failed: %s", e)
        return 1

    matrix = np.array(session.matrix, dtype=float)
    for i, (step, result) in enumerate(zip(session.steps, results)):
        if result.op == 'set':
            matrix = np.array(step.matrix, dtype=float)
            print(f"Step {i}: matrix replaced")
            continue
        source = "cached" if result.cached else "computed"
        print(f"Step {i}: inverse ({source})")
        print(result.inverse)
        if args.verify:
            product = matrix @ result.inverse
            print("Verification (A @ A^-1):")
            print(product)
            if not is_identity(product):
                logger.warning("Step %d: A @ A^-1 is not the identity", i)

    print(f"Session completed: {len(results)} steps, "
          f"{sum(r.cached for r in results)} cache hits")
    return 0

if __name__ == "__main__":
    sys.exit(main())
