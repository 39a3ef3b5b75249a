from __future__ import annotations

import sys
from pathlib import Path


def main() -> int:
    repo_root = Path(__file__).resolve().parents[1]
    test_path = repo_root / "tests" / "test_arch_boundaries.py"
    if not test_path.is_file():
        print("ERROR: tests/test_arch_boundaries.py not found.", file=sys.stderr)
        return 3

    # the test module reads its own __file__ to locate src/
    ns: dict[str, object] = {"__file__": str(test_path), "__name__": "test_arch_boundaries"}
    try:
        code = test_path.read_text(encoding="utf-8")
        exec(compile(code, str(test_path), "exec"), ns, ns)
        failed = False
        for name in ("test_core_does_not_import_upper_layers", "test_engine_does_not_import_presentation"):
            fn = ns.get(name)
            if not callable(fn):
                print(f"ERROR: {name} not found.", file=sys.stderr)
                return 3
            try:
                fn()  # type: ignore[misc]
            except AssertionError as e:
                print(str(e), file=sys.stderr)
                failed = True
        if failed:
            return 2
        print("OK: architecture boundaries respected.")
        return 0
    except Exception as e:
        print(f"ERROR: unexpected failure: {e}", file=sys.stderr)
        return 3


if __name__ == "__main__":
    raise SystemExit(main())
