#!/usr/bin/env python3
from __future__ import annotations

import argparse
from datetime import date
from typing import Dict, List, Optional

from lunaphase.core.time import datetime_to_jde
from lunaphase.core.types import PHASE_LABELS, PHASE_NAMES
from lunaphase.ephemeris.de422 import DE422_JD_MAX, DE422_JD_MIN, DE422Elongation, find_phase_near
from lunaphase.reference import phases as ph


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "lunaphase[ephemeris]"') from e


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Compare series phase instants against DE422 (residuals in minutes, TT).")
    p.add_argument("--year-start", type=int, default=1900)
    p.add_argument("--year-end", type=int, default=2100)
    p.add_argument("--every", type=int, default=1, help="use every N-th lunation")
    args = p.parse_args(argv)

    if args.year_end <= args.year_start:
        raise ValueError("--year-end must be after --year-start")
    if args.every <= 0:
        raise ValueError("--every must be positive")

    np = _need_numpy()

    print("Loading DE422 Ephemeris...")
    el = DE422Elongation.load()

    k0 = ph.estimate_k(date(args.year_start, 1, 1))
    k1 = ph.estimate_k(date(args.year_end, 1, 1))

    resid: Dict[str, List[float]] = {name: [] for name in PHASE_NAMES}
    jd_lo = max(datetime_to_jde(date(args.year_start, 1, 1)), DE422_JD_MIN + 10.0)
    jd_hi = min(datetime_to_jde(date(args.year_end, 1, 1)), DE422_JD_MAX - 10.0)

    for n in range(k0, k1 + 1, args.every):
        for q in range(4):
            k = n + q / 4.0
            jde = ph.calculate_jde(k)
            if not (jd_lo <= jde < jd_hi):
                continue
            name = ph.phase_name(k)
            t_ref = find_phase_near(el, jde, name)
            resid[name].append((jde - t_ref) * 1440.0)

    total = sum(len(v) for v in resid.values())
    print(f"Validated {total} phase instants, {args.year_start} to {args.year_end}")
    print(f"{'phase':<14} {'n':>6} {'mean':>9} {'rms':>9} {'max|.|':>9}  (minutes, series - DE422)")
    for name in PHASE_NAMES:
        r = np.array(resid[name], dtype=float)
        if r.size == 0:
            print(f"{PHASE_LABELS[name]:<14} {0:>6}")
            continue
        rms = float(np.sqrt(np.mean(r * r)))
        print(f"{PHASE_LABELS[name]:<14} {r.size:>6} {float(r.mean()):>9.3f} {rms:>9.3f} {float(np.abs(r).max()):>9.3f}")

    return 0

if __name__ == "__main__":
    raise SystemExit(main())
