"""Utility script that evaluates the task extractor on a small curated set."""

from __future__ import annotations

import json
import re
import sys
from datetime import datetime
from pathlib import Path
from statistics import mean

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from journal_tasks.logic import TaskExtractor

DATASET_PATH = Path(__file__).with_name("dataset.json")


def normalise(text: str) -> str:
    cleaned = re.sub(r"[^a-z0-9]+", " ", text.lower())
    return re.sub(r"\s+", " ", cleaned).strip()


def f1(precision: float, recall: float) -> float:
    if precision == 0 or recall == 0:
        return 0.0
    return 2 * precision * recall / (precision + recall)


def evaluate_sample(
    extractor: TaskExtractor,
    transcript: str,
    expected: list[dict[str, object]],
    reference_time: datetime,
) -> dict[str, float]:
    predicted = extractor.extract_tasks(transcript, now=reference_time)
    # One sentence may yield several tasks, so keys carry the date as well.
    predicted_map = {(normalise(item.text), item.date.isoformat()): item for item in predicted}
    expected_map = {
        (normalise(str(entry.get("text", ""))), str(entry.get("date", ""))): entry for entry in expected
    }

    predicted_texts = {text for text, _ in predicted_map if text}
    expected_texts = {text for text, _ in expected_map if text}
    true_positive_texts = predicted_texts & expected_texts

    precision = len(true_positive_texts) / len(predicted_texts) if predicted_texts else 0.0
    recall = len(true_positive_texts) / len(expected_texts) if expected_texts else 0.0
    f1_score = f1(precision, recall)

    matched_keys = set(predicted_map) & set(expected_map)
    expected_with_text = [key for key in expected_map if key[0] in true_positive_texts]
    date_accuracy = len(matched_keys) / len(expected_with_text) if expected_with_text else 0.0

    priority_matches = sum(
        1
        for key in matched_keys
        if predicted_map[key].priority.value == str(expected_map[key].get("priority", "medium"))
    )
    priority_accuracy = priority_matches / len(matched_keys) if matched_keys else 0.0

    return {
        "precision": precision,
        "recall": recall,
        "f1": f1_score,
        "date_accuracy": date_accuracy,
        "priority_accuracy": priority_accuracy,
        "predicted_tasks": float(len(predicted)),
        "expected_tasks": float(len(expected)),
    }


def main() -> None:
    if not DATASET_PATH.exists():
        raise SystemExit(f"Dataset not found: {DATASET_PATH}")

    dataset = json.loads(DATASET_PATH.read_text(encoding="utf-8"))

    extractor = TaskExtractor()

    sample_metrics = [
        evaluate_sample(
            extractor,
            sample["transcript"],
            sample.get("expected", []),
            datetime.fromisoformat(sample["reference_time"]),
        )
        for sample in dataset
    ]

    def average(metric_name: str) -> float:
        values = [metrics[metric_name] for metrics in sample_metrics]
        return float(mean(values)) if values else 0.0

    summary = {
        "precision": average("precision"),
        "recall": average("recall"),
        "f1": average("f1"),
        "date_accuracy": average("date_accuracy"),
        "priority_accuracy": average("priority_accuracy"),
        "avg_predicted_tasks": average("predicted_tasks"),
        "avg_expected_tasks": average("expected_tasks"),
    }

    print(json.dumps({"samples": sample_metrics, "aggregate": summary}, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
