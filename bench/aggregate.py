from __future__ import annotations

import argparse
import csv
import glob
import os
import statistics
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


REQUIRED = {
    "backend",
    "bind_pk",
    "op",
    "warmup",
    "rep",
    "elapsed_ns",
    "proof_len_bytes",
    "pk_len_bytes",
}

SUMMARY_FIELDS = [
    "backend",
    "bind_pk",
    "op",
    "n",
    "median_ns",
    "p95_ns",
    "stdev_ns",
    "ops_per_s",
    "median_vs_baseline",
    "proof_len_bytes",
    "pk_len_bytes",
]

GroupKey = Tuple[str, int, str]  # (backend, bind_pk, op)


@dataclass(frozen=True)
class Sample:
    backend: str
    bind_pk: int
    op: str
    elapsed_ns: int
    proof_len_bytes: int
    pk_len_bytes: int


def _read_samples(paths: List[str], include_warmup: bool) -> List[Sample]:
    samples: List[Sample] = []
    for p in paths:
        with open(p, "r", newline="") as f:
            r = csv.DictReader(f)
            missing = REQUIRED - set(r.fieldnames or [])
            if missing:
                raise ValueError(f"{p}: missing columns {sorted(missing)}")
            for d in r:
                if int(d["warmup"]) and not include_warmup:
                    continue
                samples.append(
                    Sample(
                        backend=d["backend"],
                        bind_pk=int(d["bind_pk"]),
                        op=d["op"],
                        elapsed_ns=int(d["elapsed_ns"]),
                        proof_len_bytes=int(d["proof_len_bytes"]),
                        pk_len_bytes=int(d["pk_len_bytes"]),
                    )
                )
    return samples


def _latency_stats(vals: List[int]) -> Dict[str, float]:
    median = statistics.median(vals)
    # quantiles() needs two points; a single timing is its own p95
    p95 = statistics.quantiles(vals, n=20)[-1] if len(vals) > 1 else vals[0]
    return {
        "n": len(vals),
        "median_ns": int(median),
        "p95_ns": int(p95),
        "stdev_ns": int(statistics.stdev(vals)) if len(vals) > 1 else 0,
        "ops_per_s": round(1e9 / median, 1) if median else 0.0,
    }


def _baseline_ratio(
    key: GroupKey,
    medians: Dict[GroupKey, float],
    baseline: str,
) -> Optional[float]:
    """Median of this group relative to the baseline backend for the same (bind_pk, op)."""
    _backend, bind_pk, op = key
    ref = medians.get((baseline, bind_pk, op))
    if not ref:
        return None
    return round(medians[key] / ref, 3)


def main() -> None:
    ap = argparse.ArgumentParser(description="Summarize raw benchmark CSVs per backend and operation.")
    ap.add_argument("--in", dest="inputs", nargs="*", default=None, help="Input CSV files. If omitted, uses --glob.")
    ap.add_argument("--glob", dest="globpat", default="bench/outputs/*.csv")
    ap.add_argument("--out", dest="out", default="bench/outputs/summary.csv")
    ap.add_argument("--baseline", default="ecdsa", help="Backend the other backends are compared against")
    ap.add_argument("--include-warmup", action="store_true", help="Include warmup rows (default: excluded).")
    args = ap.parse_args()

    paths = args.inputs if args.inputs else sorted(glob.glob(args.globpat))
    # never feed a previous summary back in
    paths = [p for p in paths if os.path.abspath(p) != os.path.abspath(args.out)]
    if not paths:
        raise SystemExit(f"No input CSVs found (inputs={args.inputs}, glob={args.globpat}).")

    samples = _read_samples(paths, args.include_warmup)
    groups: Dict[GroupKey, List[Sample]] = {}
    for s in samples:
        groups.setdefault((s.backend, s.bind_pk, s.op), []).append(s)

    stats = {key: _latency_stats([s.elapsed_ns for s in ss]) for key, ss in groups.items()}
    medians = {key: float(st["median_ns"]) for key, st in stats.items()}

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    with open(args.out, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=SUMMARY_FIELDS)
        w.writeheader()
        for key in sorted(groups, key=lambda k: (k[2], k[1], k[0])):
            backend, bind_pk, op = key
            first = groups[key][0]
            ratio = _baseline_ratio(key, medians, args.baseline)
            w.writerow(
                {
                    "backend": backend,
                    "bind_pk": bind_pk,
                    "op": op,
                    **stats[key],
                    "median_vs_baseline": "" if ratio is None else ratio,
                    "proof_len_bytes": first.proof_len_bytes,
                    "pk_len_bytes": first.pk_len_bytes,
                }
            )
            if ratio is not None and backend != args.baseline:
                print(f"{op:>6} bind_pk={bind_pk}: {backend} is {ratio}x {args.baseline}")

    print(f"Wrote: {args.out} ({len(samples)} timings, {len(groups)} groups)")


if __name__ == "__main__":
    main()
