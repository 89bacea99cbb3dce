"""Performance benchmark for the similarity tiers and full duplicate scans.

Times ``smart_similarity`` at each length tier (Jaro-Winkler, bounded edit
distance, trigram cosine, hash Jaccard) and full scans over synthetic
collections of increasing size.

Usage:
    python tools/benchmark.py --sizes 100,500,1000 --runs 3

Example:
    python tools/benchmark.py --sizes 200 --content-length 400 --output bench.json
"""

import argparse
import json
import random
import string
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from promptscan.dedup import DuplicateScanner, Entry, NullYielder
from promptscan.errors import ScanError
from promptscan.scan_options import ScanOptions
from promptscan.similarity import smart_similarity

TIER_LENGTHS = {
    "jaro_winkler": 80,
    "threshold_similarity": 800,
    "cosine_ngram": 8000,
    "hash_jaccard": 20000,
}


def random_text(rng: random.Random, length: int) -> str:
    alphabet = string.ascii_lowercase + "     "
    return "".join(rng.choice(alphabet) for _ in range(length))


def mutate(rng: random.Random, text: str, edits: int) -> str:
    chars = list(text)
    for _ in range(edits):
        pos = rng.randrange(len(chars))
        chars[pos] = rng.choice(string.ascii_lowercase)
    return "".join(chars)


def bench_tiers(rng: random.Random, runs: int) -> List[Dict[str, Any]]:
    """Time one near-duplicate pair per tier."""
    results = []
    for tier, length in TIER_LENGTHS.items():
        base = random_text(rng, length)
        other = mutate(rng, base, max(1, length // 50))
        durations = []
        score = None
        for _ in range(runs):
            start = time.perf_counter()
            score = smart_similarity(base, other, 0.9)
            durations.append(time.perf_counter() - start)
        results.append({
            "tier": tier,
            "length": length,
            "score": score if isinstance(score, float) else str(score),
            "best_ms": round(min(durations) * 1000, 3),
        })
    return results


def synthetic_entries(rng: random.Random, count: int, content_length: int, dup_rate: float) -> List[Entry]:
    entries: List[Entry] = []
    for i in range(count):
        if entries and rng.random() < dup_rate:
            source = rng.choice(entries)
            entries.append(Entry(id=str(i), title=source.title, content=mutate(rng, source.content, 2)))
        else:
            entries.append(Entry(
                id=str(i),
                title=f"Prompt {i} {random_text(rng, 12)}",
                content=random_text(rng, content_length),
            ))
    return entries


def bench_scans(rng: random.Random, sizes: List[int], content_length: int,
                dup_rate: float, runs: int, timeout_ms: int) -> List[Dict[str, Any]]:
    """Time full scans for each collection size."""
    results = []
    scanner = DuplicateScanner(yielder=NullYielder())
    for size in sizes:
        entries = synthetic_entries(rng, size, content_length, dup_rate)
        options = ScanOptions(max_items=max(size, 1), timeout_ms=timeout_ms)
        durations = []
        groups = 0
        error = None
        for _ in range(runs):
            start = time.perf_counter()
            try:
                groups = len(scanner.scan(entries, options))
            except ScanError as e:
                error = e.user_message()
                break
            durations.append(time.perf_counter() - start)
        results.append({
            "entries": size,
            "groups": groups,
            "best_seconds": round(min(durations), 3) if durations else None,
            "error": error,
        })
    return results


def print_results(tiers: List[Dict[str, Any]], scans: List[Dict[str, Any]]) -> None:
    print("\n" + "=" * 80)
    print("SIMILARITY TIERS")
    print("=" * 80)
    print(f"\n{'Tier':<24} {'Length':<10} {'Best (ms)':<12} {'Score'}")
    print("-" * 80)
    for r in tiers:
        print(f"{r['tier']:<24} {r['length']:<10} {r['best_ms']:<12} {r['score']}")

    print("\n" + "=" * 80)
    print("FULL SCANS")
    print("=" * 80)
    print(f"\n{'Entries':<10} {'Groups':<10} {'Best (s)':<12} {'Status'}")
    print("-" * 80)
    for r in scans:
        status = 'OK' if r['error'] is None else r['error']
        best = r['best_seconds'] if r['best_seconds'] is not None else '-'
        print(f"{r['entries']:<10} {r['groups']:<10} {best:<12} {status}")


def save_results(data: Dict[str, Any], output_file: str = None) -> None:
    if output_file is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output_file = f"benchmark_results_{timestamp}.json"

    output_path = Path("tools") / output_file
    with open(output_path, 'w') as f:
        json.dump({"timestamp": datetime.now().isoformat(), **data}, f, indent=2)

    print(f"\n✓ Results saved to: {output_path}")


def main():
    parser = argparse.ArgumentParser(description="Benchmark similarity tiers and duplicate scans")
    parser.add_argument("--sizes", type=str, default="100,300,1000",
                        help="Comma-separated collection sizes (default: 100,300,1000)")
    parser.add_argument("--content-length", type=int, default=300,
                        help="Content length of synthetic prompts (default: 300)")
    parser.add_argument("--dup-rate", type=float, default=0.1,
                        help="Fraction of prompts that are near-copies (default: 0.1)")
    parser.add_argument("--runs", type=int, default=1, help="Runs per measurement (default: 1)")
    parser.add_argument("--timeout-ms", type=int, default=60000, help="Scan timeout (default: 60000)")
    parser.add_argument("--seed", type=int, default=7, help="Random seed (default: 7)")
    parser.add_argument("--output", type=str, help="Save results as JSON under tools/")

    args = parser.parse_args()
    sizes = [int(s.strip()) for s in args.sizes.split(',') if s.strip()]
    rng = random.Random(args.seed)

    print("=" * 80)
    print("PROMPTSCAN - PERFORMANCE BENCHMARK")
    print("=" * 80)
    print(f"Sizes: {sizes}")
    print(f"Content length: {args.content_length}")
    print(f"Runs per measurement: {args.runs}")

    tiers = bench_tiers(rng, args.runs)
    scans = bench_scans(rng, sizes, args.content_length, args.dup_rate, args.runs, args.timeout_ms)
    print_results(tiers, scans)

    if args.output:
        save_results({"tiers": tiers, "scans": scans}, args.output)


if __name__ == "__main__":
    main()
