from __future__ import annotations

import argparse
import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.patches import Patch

plt.rcParams.update({
    "font.size": 11,
    "axes.titlesize": 12,
    "axes.labelsize": 11,
    "legend.fontsize": 10,
    "xtick.labelsize": 10,
    "ytick.labelsize": 10,
})

# hatch/line style maps (BW-friendly)
HATCHES = {
    "ecdsa": "///",
    "pyecc": "\\\\\\",
}
LINESTYLES = {
    "ecdsa": ("-", "o"),
    "pyecc": ("--", "s"),
}


def ns_to_ms(ns: float) -> float:
    return ns / 1e6


def _load_summary(path: str) -> pd.DataFrame:
    df = pd.read_csv(path)

    op_order = ["KeyGen", "Prove", "Verify"]
    df["op"] = pd.Categorical(df["op"], categories=op_order, ordered=True)
    df["backend"] = df["backend"].astype(str) + np.where(df["bind_pk"] == 1, "", " (R,m)")
    df = df.sort_values(["op", "backend"])
    return df


def _save(fig, out_dir: str, stem: str) -> None:
    os.makedirs(out_dir, exist_ok=True)
    pdf_path = os.path.join(out_dir, f"{stem}.pdf")
    png_path = os.path.join(out_dir, f"{stem}.png")
    fig.savefig(pdf_path)
    fig.savefig(png_path, dpi=300)
    plt.close(fig)
    print(f"[{stem}] Saved to {pdf_path} and {png_path}")


def _apply_hatches_and_bw_legend(ax: plt.Axes, backends_in_order: list[str]) -> None:
    # pandas bar creates one container per column (= per backend)
    for i, cont in enumerate(ax.containers):
        if i >= len(backends_in_order):
            break
        hatch = HATCHES.get(backends_in_order[i].split(" ")[0], "")
        for p in cont.patches:
            p.set_hatch(hatch)
            p.set_edgecolor("black")
            p.set_linewidth(0.8)

    handles = [
        Patch(facecolor="white", edgecolor="black", hatch=HATCHES.get(b.split(" ")[0], ""), label=b)
        for b in backends_in_order
    ]
    ax.legend(handles=handles, title="Backend", frameon=False)


def _plot_latency(df: pd.DataFrame, column: str, title: str, out_dir: str, stem: str) -> None:
    df = df.copy()
    df["ms"] = df[column].apply(ns_to_ms)
    pivot = df.pivot_table(index="op", columns="backend", values="ms", observed=False)

    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    pivot.plot(kind="bar", ax=ax, width=0.75)

    ax.set_ylabel("Latency (ms)")
    ax.set_xlabel("")
    ax.set_title(title)
    ax.grid(axis="y", linestyle="--", linewidth=0.5, alpha=0.7)
    _apply_hatches_and_bw_legend(ax, [str(c) for c in pivot.columns])

    fig.tight_layout()
    _save(fig, out_dir, stem)


def plot_fig2_verify_throughput(df: pd.DataFrame, out_dir: str) -> None:
    """Projected single-core verification time for batches of proofs."""
    sub = df[df["op"] == "Verify"][["backend", "median_ns"]]
    batches = np.array([1e1, 1e2, 1e3, 1e4], dtype=float)

    fig, ax = plt.subplots(figsize=(6.5, 3.8))
    for _, row in sub.iterrows():
        backend = str(row["backend"])
        seconds = batches * float(row["median_ns"]) / 1e9
        ls, mk = LINESTYLES.get(backend.split(" ")[0], ("-", "o"))
        ax.plot(
            batches,
            seconds,
            linestyle=ls,
            marker=mk,
            markerfacecolor="none",
            markeredgecolor="black",
            label=backend,
        )

    ax.set_xscale("log")
    ax.set_yscale("log")
    ax.set_xlabel("Number of Proofs")
    ax.set_ylabel("Verification Time (s)")
    ax.set_title("Sequential Batch Verification (median per proof)")
    ax.legend(title="Backend", frameon=False)
    ax.grid(True, which="both", linestyle="--", linewidth=0.5, alpha=0.7)
    fig.tight_layout()
    _save(fig, out_dir, "fig2_verify_batches")


def main() -> None:
    ap = argparse.ArgumentParser(description="Plot benchmark summaries.")
    ap.add_argument("--summary", default="bench/outputs/summary.csv")
    ap.add_argument("--out-dir", default="bench/figures")
    args = ap.parse_args()

    df = _load_summary(args.summary)
    _plot_latency(df, "median_ns", "Schnorr Proof Operations (Median)", args.out_dir, "fig1_latency_median")
    _plot_latency(df, "p95_ns", "Schnorr Proof Operations (p95)", args.out_dir, "fig1b_latency_p95")
    plot_fig2_verify_throughput(df, args.out_dir)


if __name__ == "__main__":
    main()
