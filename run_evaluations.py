#!/usr/bin/env python3
import asyncio
import logging
import sys
import time
from pathlib import Path

from passcheck import EvaluationOptions, evaluate
from passcheck.metrics import EvaluationMetrics

# Configuration
PASSWORDS_DIR = Path("passwords")
RESULTS_DIR = "results"
CHECK_PWNED = "--online" in sys.argv


def load_passwords(file_path):
    """Loads a password list, one password per line"""
    with open(file_path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


async def evaluate_list(passwords, options, metrics):
    metrics.start()

    for i, password in enumerate(passwords, 1):
        start = time.time()
        report = await evaluate(password, options)
        latency = int((time.time() - start) * 1000)
        metrics.record(report, latency)

        # Sample resources every 10 evaluations
        if i % 10 == 0:
            metrics.sample_resources()

        # Progress display
        if i % 100 == 0:
            print(f"   ... {i}/{len(passwords)} evaluations")

    metrics.stop()


def run_evaluation(file_path):
    """Evaluates one password list and saves its metrics report"""
    run_name = f"evaluation_{file_path.stem}"
    print(f"\n{'='*60}")
    print(f"🧪 RUN: {run_name}")
    print(f"{'='*60}")

    passwords = load_passwords(file_path)
    options = EvaluationOptions(check_pwned=CHECK_PWNED, check_pwned_offline=True)

    metrics = EvaluationMetrics(run_name)
    asyncio.run(evaluate_list(passwords, options, metrics))

    report = metrics.save_report(RESULTS_DIR)
    print(f"\n📈 Results:")
    print(f"   - Evaluations: {report['total_evaluations']}")
    print(f"   - Average score: {report['avg_score']}")
    print(f"   - Levels: {report['levels']}")
    print(f"   - Breached: {report['breached']} (unknown: {report['breach_unknown']})")

    return report


def main():
    """Evaluates every password list in the passwords directory"""
    logging.basicConfig(level=logging.WARNING)

    files = sorted(PASSWORDS_DIR.glob("*_passwords.txt"))
    if not files:
        print(f"❌ No password lists found in {PASSWORDS_DIR}/ (run password_gen.py first)")
        sys.exit(1)

    print("🚀 STARTING EVALUATIONS")
    print("="*60)

    all_reports = []
    for file_path in files:
        try:
            all_reports.append(run_evaluation(file_path))
        except KeyboardInterrupt:
            print("\n⚠️  User interruption")
            sys.exit(0)
        except OSError as e:
            print(f"❌ Error: {e}")

    print("\n" + "="*60)
    print("✅ ALL EVALUATIONS COMPLETED")
    print(f"📊 {len(all_reports)} reports generated in /{RESULTS_DIR}")


if __name__ == "__main__":
    main()
