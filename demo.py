"""
Bounded Heap Demo -- eviction on a random stream, bulk build vs repeated push,
and drain ordering.

Generates:
- viz/*.png -- Individual visualization files
- report.pdf -- Comprehensive PDF report
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from bounded_heap import BoundedHeap

SEED = 42
np.random.seed(SEED)

VIZ_DIR = Path(__file__).parent / "viz"
VIZ_DIR.mkdir(exist_ok=True)

COLORS = {
    "blue": "#3498db",
    "red": "#e74c3c",
    "orange": "#f39c12",
    "green": "#27ae60",
    "purple": "#9b59b6",
    "dark": "#2c3e50",
}

STREAM_LENGTH = 400
CAPACITY = 20
BUILD_SIZES = [2 ** k for k in range(4, 14)]


class Task:
    calls = 0

    def __init__(self, priority, name=""):
        self.priority = priority
        self.name = name

    def order(self):
        Task.calls += 1
        return self.priority


# ---------------------------------------------------------------------------
# Example 1: Bounded Eviction on a Random Stream
# ---------------------------------------------------------------------------
def example_1_bounded_eviction():
    """Feed a random stream into a bounded heap and track what it evicts."""
    print("=" * 60)
    print("Example 1: Bounded Eviction on a Random Stream")
    print("=" * 60)

    np.random.seed(SEED)
    stream = np.random.randint(0, 1000, size=STREAM_LENGTH)
    heap = BoundedHeap(CAPACITY)

    evicted_at, evicted_vals, root_trace = [], [], []
    for step, value in enumerate(stream):
        evicted, overflowed = heap.push(Task(int(value), f"task-{step}"))
        if overflowed:
            evicted_at.append(step)
            evicted_vals.append(evicted.priority)
        root, _ = heap.peek()
        root_trace.append(root.priority)

    retained = sorted(t.priority for t in heap.snapshot())
    top_k = sorted(stream.tolist())[-CAPACITY:]
    print(f"\n  Stream length: {STREAM_LENGTH}, capacity: {CAPACITY}")
    print(f"  Evictions: {len(evicted_vals)}")
    print(f"  Retained:  {retained}")
    print(f"  Largest {CAPACITY} in stream match retained set: {retained == top_k}")
    assert retained == top_k, "Bounded heap should retain the highest orders"

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].scatter(range(STREAM_LENGTH), stream, s=8, color=COLORS["blue"],
                    alpha=0.4, label="Stream")
    axes[0].scatter(evicted_at, evicted_vals, s=10, color=COLORS["red"],
                    label="Evicted")
    axes[0].plot(root_trace, color=COLORS["dark"], linewidth=1.5, label="Root order")
    axes[0].set_xlabel("Push index")
    axes[0].set_ylabel("Order")
    axes[0].set_title("Evicted minimum rises as the heap fills with large orders",
                      fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    axes[1].hist(stream, bins=40, color=COLORS["blue"], alpha=0.5, label="Stream")
    axes[1].hist(retained, bins=40, color=COLORS["green"], alpha=0.9, label="Retained")
    axes[1].set_xlabel("Order")
    axes[1].set_ylabel("Count")
    axes[1].set_title(f"Retained set = {CAPACITY} largest orders", fontsize=10,
                      fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3, axis="y")

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "01_bounded_eviction.png", dpi=150, bbox_inches="tight")
    return fig


# ---------------------------------------------------------------------------
# Example 2: Bulk Build vs Repeated Push
# ---------------------------------------------------------------------------
def example_2_build_cost():
    """Count order() calls for heapify against N individual pushes."""
    print("\n" + "=" * 60)
    print("Example 2: Bulk Build vs Repeated Push")
    print("=" * 60)

    heapify_calls, push_calls = [], []
    for n in BUILD_SIZES:
        np.random.seed(SEED)
        keys = np.random.permutation(n)

        Task.calls = 0
        BoundedHeap.heapify([Task(int(k)) for k in keys])
        heapify_calls.append(Task.calls)

        # descending keys force every push to sift all the way up
        Task.calls = 0
        heap = BoundedHeap()
        for k in range(n, 0, -1):
            heap.push(Task(k))
        push_calls.append(Task.calls)

        print(f"  N={n:>5}: heapify {heapify_calls[-1]:>7} calls "
              f"({heapify_calls[-1] / n:.2f}/elem), "
              f"push {push_calls[-1]:>7} calls ({push_calls[-1] / n:.2f}/elem)")

    sizes = np.array(BUILD_SIZES)
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))

    axes[0].plot(sizes, heapify_calls, "o-", color=COLORS["green"], label="heapify")
    axes[0].plot(sizes, push_calls, "s-", color=COLORS["red"], label="repeated push (worst case)")
    axes[0].set_xscale("log", base=2)
    axes[0].set_yscale("log")
    axes[0].set_xlabel("N")
    axes[0].set_ylabel("order() calls")
    axes[0].set_title("Build cost", fontsize=10, fontweight="bold")
    axes[0].legend(fontsize=9)
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(sizes, np.array(heapify_calls) / sizes, "o-", color=COLORS["green"],
                 label="heapify")
    axes[1].plot(sizes, np.array(push_calls) / sizes, "s-", color=COLORS["red"],
                 label="repeated push")
    axes[1].set_xscale("log", base=2)
    axes[1].set_xlabel("N")
    axes[1].set_ylabel("order() calls per element")
    axes[1].set_title("Flat line = linear build, rising line = N log N",
                      fontsize=10, fontweight="bold")
    axes[1].legend(fontsize=9)
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "02_build_cost.png", dpi=150, bbox_inches="tight")
    return fig


# ---------------------------------------------------------------------------
# Example 3: Drain Ordering
# ---------------------------------------------------------------------------
def example_3_drain_ordering():
    """Pop everything out and confirm orders never decrease."""
    print("\n" + "=" * 60)
    print("Example 3: Drain Ordering")
    print("=" * 60)

    np.random.seed(SEED)
    keys = np.random.randint(-500, 500, size=300)
    heap = BoundedHeap.heapify([Task(int(k)) for k in keys])

    sizes, drained = [], []
    while True:
        sizes.append(heap.size())
        item, found = heap.pop()
        if not found:
            break
        drained.append(item.priority)

    monotone = all(a <= b for a, b in zip(drained, drained[1:]))
    print(f"\n  Drained {len(drained)} of {len(keys)} elements, non-decreasing: {monotone}")
    assert monotone and len(drained) == len(keys)

    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    axes[0].plot(drained, color=COLORS["purple"])
    axes[0].set_xlabel("Pop index")
    axes[0].set_ylabel("Order")
    axes[0].set_title("Popped orders", fontsize=10, fontweight="bold")
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(sizes, color=COLORS["orange"])
    axes[1].set_xlabel("Pop index")
    axes[1].set_ylabel("size()")
    axes[1].set_title("Size shrinks by one per pop", fontsize=10, fontweight="bold")
    axes[1].grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(VIZ_DIR / "03_drain_ordering.png", dpi=150, bbox_inches="tight")
    return fig


def main():
    figures = [
        example_1_bounded_eviction(),
        example_2_build_cost(),
        example_3_drain_ordering(),
    ]

    report_path = Path(__file__).parent / "report.pdf"
    with PdfPages(report_path) as pdf:
        for fig in figures:
            pdf.savefig(fig)
            plt.close(fig)

    print(f"\nSaved {len(figures)} figures to {VIZ_DIR}/ and report to {report_path}")


if __name__ == "__main__":
    main()
