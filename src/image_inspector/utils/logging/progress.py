# ABOUTME: Spinner shown on the console while seed ids are verified
# ABOUTME: Thin wrapper around a transient Rich progress task

from typing import Any

from rich.progress import Progress, SpinnerColumn, TextColumn


class SimpleProgressTracker:
    """Rewrites the description of one spinner task."""

    def __init__(self, progress: Progress, task_id: Any):
        self.progress = progress
        self.task_id = task_id

    def update(self, description: str) -> None:
        self.progress.update(self.task_id, description=description)


def create_smart_progress(
    console, initial_description: str = "🔎 Inspecting content..."
) -> tuple[Progress, Any, SimpleProgressTracker]:
    """Create a transient spinner bound to ``console``.

    Returns:
        Tuple of (progress, task_id, tracker)
    """
    progress = Progress(
        SpinnerColumn(), TextColumn("[progress.description]{task.description}"), console=console, transient=True
    )
    task_id = progress.add_task(initial_description, total=None)
    return progress, task_id, SimpleProgressTracker(progress, task_id)
