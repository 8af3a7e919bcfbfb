import argparse
import json
from itertools import product
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from game.ruleset import DEFAULT_RULES


CODE_LENGTH = DEFAULT_RULES["code_length"]
CONSUMED = DEFAULT_RULES["consumed"]


def all_codes():
    """
    Return every valid code as an int8 array of shape (6**4, 4), in
    lexicographic order.
    """
    return np.array(
        list(product(DEFAULT_RULES["colors"], repeat=CODE_LENGTH)), dtype=np.int8
    )


def feedback_matrix(guesses, solutions):
    """
    Vectorised peg matching for every (guess, solution) pair.

    Same steps as game.matcher.match, with np.where as the select: both
    passes run over whole arrays, so no pair takes a different path.

    Args:
        guesses: int array (G, 4)
        solutions: int array (S, 4)
    Returns:
        black, white: int8 arrays of shape (G, S)
    """
    guesses = np.asarray(guesses, dtype=np.int8)
    solutions = np.asarray(solutions, dtype=np.int8)

    g = np.repeat(guesses[:, None, :], len(solutions), axis=1)
    s = np.repeat(solutions[None, :, :], len(guesses), axis=0)
    black = np.zeros(g.shape[:2], dtype=np.int8)
    white = np.zeros(g.shape[:2], dtype=np.int8)

    for i in range(CODE_LENGTH):
        hit = g[..., i] == s[..., i]
        black += hit
        g[..., i] = np.where(hit, CONSUMED, g[..., i])
        s[..., i] = np.where(hit, CONSUMED, s[..., i])

    for i in range(CODE_LENGTH):
        for j in range(CODE_LENGTH):
            hit = (g[..., i] != CONSUMED) & (g[..., i] == s[..., j])
            white += hit
            g[..., i] = np.where(hit, CONSUMED, g[..., i])
            s[..., j] = np.where(hit, CONSUMED, s[..., j])

    return black, white


def feedback_distribution(black, white):
    """
    Count how often each (black, white) feedback occurs.

    Returns:
        dict[tuple[int, int], int] over every feedback that occurs at least once.
    """
    pairs, counts = np.unique(
        np.stack([black.ravel(), white.ravel()], axis=1), axis=0, return_counts=True
    )
    return {(int(b), int(w)): int(c) for (b, w), c in zip(pairs, counts)}


def partition_sizes(black, white, guess_index):
    """
    Sizes of the groups the solutions fall into for one guess, i.e. how many
    solutions remain possible after each feedback. Largest first.
    """
    dist = feedback_distribution(black[guess_index : guess_index + 1], white[guess_index : guess_index + 1])
    return sorted(dist.values(), reverse=True)


def _annotate_bars(ax, bars, fmt="{:d}", dy=3, fontsize=7):
    """
    Annotate bars on ax with their heights.

    Args:
        ax: matplotlib Axes
        bars: BarContainer returned by ax.bar
        fmt: format string for the values
        dy: y offset in points
        fontsize: font size for annotations
    """
    for bar in bars:
        height = bar.get_height()
        ax.annotate(
            fmt.format(int(height)),
            (bar.get_x() + bar.get_width() / 2, height),
            textcoords="offset points",
            xytext=(0, dy),
            ha="center",
            va="bottom",
            fontsize=fontsize,
        )


def plot_feedback_distribution(dist, out):
    """Bar chart of feedback frequencies over all code pairs."""
    labels = [f"{b}B{w}W" for b, w in sorted(dist)]
    values = [dist[k] for k in sorted(dist)]

    fig, ax = plt.subplots(figsize=(12, 6))
    bars = ax.bar(labels, values)
    _annotate_bars(ax, bars)
    ax.set_title("Feedback frequency over all (guess, solution) pairs")
    ax.set_xlabel("Feedback (black, white)")
    ax.set_ylabel("Number of pairs")
    ax.tick_params(axis="x", rotation=45)
    ax.grid(True, axis="y")
    fig.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return Path(out)


def plot_partition_sizes(sizes_by_guess, out):
    """
    Sorted partition sizes for a few first guesses, one line per guess.

    Args:
        sizes_by_guess (dict[str, list[int]]): guess string -> partition sizes
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    for label, sizes in sizes_by_guess.items():
        x = np.arange(1, len(sizes) + 1)
        ax.plot(x, sizes, marker="o", markersize=3, label=f"{label} (worst={sizes[0]})")
    ax.set_title("Remaining solutions per feedback")
    ax.set_xlabel("Feedback rank")
    ax.set_ylabel("Remaining solutions")
    ax.grid(True)
    ax.legend(title="First guess")
    fig.savefig(out, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return Path(out)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Feedback statistics of the peg matcher.")
    ap.add_argument("--guesses", nargs="*", default=["1122", "1123", "1234", "1111"],
                    help="First guesses to compare (e.g. --guesses 1122 1234).")
    ap.add_argument("--outdir", default="./results", help="Output directory for PNGs and JSON")
    args = ap.parse_args(argv)

    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    codes = all_codes()
    black, white = feedback_matrix(codes, codes)
    dist = feedback_distribution(black, white)

    index = {"".join(str(int(c)) for c in code): n for n, code in enumerate(codes)}
    sizes_by_guess = {}
    for guess in args.guesses:
        if guess not in index:
            print(f"[skip] {guess} is not a valid code.")
            continue
        sizes_by_guess[guess] = partition_sizes(black, white, index[guess])

    plot_feedback_distribution(dist, outdir / "feedback_distribution.png")
    if sizes_by_guess:
        plot_partition_sizes(sizes_by_guess, outdir / "partition_sizes.png")

    with (outdir / "feedback_distribution.json").open("w", encoding="utf-8") as f:
        json.dump(
            {
                "distribution": {f"{b},{w}": c for (b, w), c in sorted(dist.items())},
                "partition_sizes": sizes_by_guess,
            },
            f,
            indent=2,
        )

    print(f"Wrote results for {len(codes)} codes to {outdir}.")


if __name__ == "__main__":
    main()
