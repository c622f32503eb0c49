# tools/profile_search.py
"""
Small profiling harness for EmojiService.search.
Usage:
  python tools/profile_search.py --warm 50 --iters 500
  python tools/profile_search.py --query "cow" --query "smiling face"

Prints mean/median/p90/max latency per query and a sample of results.
"""
import argparse
import random
import statistics

from rich import box
from rich.console import Console
from rich.table import Table

from emoji_picker.core.emoji_service import EmojiService
from emoji_picker.utils.cache_utils import timed

console = Console()

DEFAULT_QUERIES = [
    "cow",
    "cowboy",
    "smil",
    "heart",
    "hart",
    "face with",
    "flag",
    ":)",
    "xyzabc123",
]


@timed
def build_service(corpus):
    return EmojiService(corpus_path=corpus, eager=True)


def benchmark(service, query, iterations=200):
    search = timed(service.search)
    times = []
    for _ in range(iterations):
        _res, elapsed = search(query)
        times.append(elapsed * 1000.0)  # ms
    return times


def summarize(times):
    times_sorted = sorted(times)
    return {
        "count": len(times_sorted),
        "mean_ms": statistics.mean(times_sorted),
        "median_ms": statistics.median(times_sorted),
        "p90_ms": times_sorted[max(0, int(0.9 * len(times_sorted)) - 1)],
        "max_ms": max(times_sorted),
    }


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--warm", type=int, default=50, help="warmup iterations")
    parser.add_argument("--iters", type=int, default=300, help="measured iterations per query")
    parser.add_argument("--query", action="append", help="query to profile (repeatable)")
    parser.add_argument("--corpus", type=str, default=None, help="corpus JSON (default: bundled)")
    args = parser.parse_args()

    service, build_s = build_service(args.corpus)
    console.print(f"[cyan]Corpus ready:[/cyan] {len(service.get_all())} records in {build_s * 1000:.1f} ms")

    queries = args.query or DEFAULT_QUERIES
    console.print("[dim]Warming up...[/dim]")
    for _ in range(args.warm):
        service.search(random.choice(queries))

    table = Table(title="search() latency (ms)", box=box.SIMPLE)
    for col in ("query", "results", "mean", "median", "p90", "max", "top hits"):
        table.add_column(col)
    for q in queries:
        s = summarize(benchmark(service, q, iterations=args.iters))
        results = service.search(q)
        table.add_row(
            repr(q),
            str(len(results)),
            f"{s['mean_ms']:.3f}",
            f"{s['median_ms']:.3f}",
            f"{s['p90_ms']:.3f}",
            f"{s['max_ms']:.3f}",
            " ".join(r.display for r in results[:8]),
        )
    console.print(table)


if __name__ == "__main__":
    main()
