"""MLflow integration for test report snapshots."""

import re
from typing import Optional

import mlflow

from splitsmith.io.ser import TestReport


def _metric_name(text: str) -> str:
    # MLflow metric names allow alphanumerics, _ - . / and spaces
    return re.sub(r"[^0-9A-Za-z_\-./ ]", "_", text)


def log_report_to_mlflow(report: TestReport, step: Optional[int] = None) -> str:
    """
    Log a test snapshot to the active MLflow run.

    Logs test totals and per-form prospects, score and bound as metrics, and
    the full snapshot as a JSON artifact.

    Args:
        report: Snapshot from ``splitsmith.ab.metrics.snapshot``
        step: Optional metric step (e.g. a reporting interval counter)

    Returns:
        Artifact path of the snapshot
    """
    test = _metric_name(report.test_id)
    mlflow.log_metric(f"mab_{test}_total_prospects", report.total_prospects, step=step)
    mlflow.log_metric(f"mab_{test}_total_score", report.total_score, step=step)

    for form in report.forms:
        form_name = _metric_name(form.form_id)
        mlflow.log_metric(f"mab_{test}_{form_name}_nprospects", form.nprospects, step=step)
        mlflow.log_metric(f"mab_{test}_{form_name}_score", form.score, step=step)
        mlflow.log_metric(f"mab_{test}_{form_name}_bound", form.bound, step=step)

    artifact_path = f"mab_report_{test}.json"
    mlflow.log_dict(report.model_dump(), artifact_path)
    return artifact_path
