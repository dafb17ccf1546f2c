from __future__ import annotations

import argparse
from datetime import date
import sys
import re
import importlib
import inspect

from .core.types import PHASE_NAMES


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_ymd(s: str) -> date:
    if not _DATE_RE.match(s):
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got {s!r}")
    y, m, d = map(int, s.split("-"))
    return date(y, m, d)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _fmt_utc(dt) -> str:
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def cmd_jde(argv: list[str]) -> int:
    import lunaphase

    p = argparse.ArgumentParser(prog="lunaphase jde", description="Phase instant for a lunation index k.")
    p.add_argument("k", type=float, help="lunation index (k=0: new moon of 2000-01-06; +.25/.5/.75 for other phases)")
    args = p.parse_args(argv)

    info = lunaphase.explain(args.k)

    print(f"k = {info['k']:g}  ({info['phase']})")
    print(f"T (Julian centuries from J2000.0) = {info['T']:.12f}")
    print()
    print("Orbital elements (degrees, wrapped to [0,360))")
    print(f"  M      = {info['M_deg']:.10f}")
    print(f"  M'     = {info['Mp_deg']:.10f}")
    print(f"  F      = {info['F_deg']:.10f}")
    print(f"  Omega  = {info['Omega_deg']:.10f}")
    print(f"  E      = {info['E']:.10f}")
    print()
    print("Corrections (days)")
    print(f"  periodic         = {info['periodic']:+.6f}")
    if info["phase"] in ("first_quarter", "last_quarter"):
        print(f"  quarter-specific = {info['quarter_specific']:+.6f}")
    print(f"  planetary        = {info['planetary']:+.6f}")
    print()
    print(f"JDE mean  = {info['jde_mean']:.5f}")
    print(f"JDE       = {info['jde']:.5f}")
    print(f"UTC       = {_fmt_utc(info['utc'])}  (no ΔT)")
    return 0


def cmd_nearest(argv: list[str]) -> int:
    import lunaphase
    from .reference.phases import k_for_phase

    p = argparse.ArgumentParser(prog="lunaphase nearest", description="Estimate the lunation index for a date.")
    p.add_argument("date", type=_parse_ymd, help="YYYY-MM-DD")
    p.add_argument("--phase", choices=PHASE_NAMES, default="new_moon")
    args = p.parse_args(argv)

    k0 = lunaphase.estimate_index_for_date(args.date)
    k = k_for_phase(k0, args.phase)
    ev = lunaphase.phase_event(k)
    print(f"k = {ev.k:g}")
    print(f"{ev.label}: JDE {ev.jde:.5f}  UTC {_fmt_utc(ev.utc)}")
    return 0


def cmd_table(argv: list[str]) -> int:
    import lunaphase

    p = argparse.ArgumentParser(prog="lunaphase table", description="List phase instants in [start, end).")
    p.add_argument("--start", type=_parse_ymd, required=True, help="YYYY-MM-DD (inclusive)")
    p.add_argument("--end", type=_parse_ymd, required=True, help="YYYY-MM-DD (exclusive)")
    p.add_argument("--phase", action="append", choices=PHASE_NAMES, default=[], help="phase name (repeatable, default all)")
    args = p.parse_args(argv)

    phases = tuple(args.phase) or PHASE_NAMES
    for ev in lunaphase.phases_between(args.start, args.end, phases=phases):
        print(f"{ev.k:>10.2f}  {ev.label:<14}  {ev.jde:.5f}  {_fmt_utc(ev.utc)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `lunaphase YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        return cmd_nearest(argv)

    p = argparse.ArgumentParser(prog="lunaphase", description="Lunar phase instants (Meeus, ch. 49).")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("jde", help="Phase instant and intermediate values for a lunation index k")
    sub.add_parser("nearest", help="Lunation index and phase instant nearest a date")
    sub.add_parser("table", help="Phase instants between two dates")

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument(
        "tool",
        choices=["validate-phases"],
        help="Which ephemeris diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "jde":
        return cmd_jde(rest)

    if args.cmd == "nearest":
        return cmd_nearest(rest)

    if args.cmd == "table":
        return cmd_table(rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate-phases": "lunaphase.diagnostics.validate_phases",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
