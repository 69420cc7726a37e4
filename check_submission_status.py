"""Проверка статуса сдачи задания из терминала.

Examples:
    python check_submission_status.py --user 7 --assignment 12
    python check_submission_status.py --user 7 --assignment 12 --delete
    python check_submission_status.py --assignment 12 --admin
"""
import argparse
import asyncio
import logging
import sys

from core.config import Config
from core.models import Assignment, DeleteOutcome, LifecycleStatus, User
from prompts.console_prompt import ConsolePrompt
from services.wiring import create_admin_controller, create_controller, create_repository
from utils.view_helpers import format_due_date, status_message, summarize_record

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def _print_view(controller) -> None:
    view = controller.view
    if view.assignment is not None:
        print(f"Assignment: {view.assignment.title or view.assignment.assignment_id}")
        due = format_due_date(view.assignment)
        if due:
            print(due)
    print(status_message(view))
    if view.state.status == LifecycleStatus.COMPLETED:
        summary = summarize_record(view.state.record)
        print(f"Samples: {summary['samples']}, final score: {summary['final_score']}, best score: {summary['best_score']}")
    if view.notice:
        print(f"⚠️ {view.notice}")


async def check_user_submission(user_id: int, assignment_id: int, delete: bool) -> int:
    """Показать состояние сдачи и при необходимости удалить её."""
    user = User(user_id=user_id)
    assignment = Assignment(assignment_id=assignment_id, title="")

    async with create_repository() as repository:
        controller = create_controller(repository, ConsolePrompt())
        await controller.refresh(user, assignment)
        _print_view(controller)

        if delete:
            submission_id = controller.state.known_submission_id
            if submission_id is None:
                print("Nothing to delete.")
                return 1
            outcome = await controller.request_delete(submission_id)
            logger.info(f"Delete outcome: {outcome.value}")
            _print_view(controller)
            if outcome == DeleteOutcome.FAILED:
                return 1

    return 1 if controller.state.status == LifecycleStatus.ERROR else 0


async def list_assignment_submissions(assignment_id: int, delete_id: int) -> int:
    """Список всех сдач по заданию (для администратора)."""
    assignment = Assignment(assignment_id=assignment_id, title="")

    async with create_repository() as repository:
        controller = create_admin_controller(repository, ConsolePrompt())
        rows = await controller.refresh(assignment)
        if delete_id:
            await controller.request_delete(delete_id)
            rows = controller.rows

        if controller.error is not None:
            print(f"❌ {controller.error.user_message}")
            return 1
        if not rows:
            print("No submissions available.")
        for row in rows:
            score = row.final_score if row.final_score is not None else "processing"
            print(f"ID: {row.submission.submission_id} | user {row.submission.user_id} | Score: {score}")
    return 0


def main() -> int:
    ap = argparse.ArgumentParser(description="Show or delete an assignment submission")
    ap.add_argument("--user", type=int, default=0, help="User ID")
    ap.add_argument("--assignment", type=int, required=True, help="Assignment ID")
    ap.add_argument("--delete", action="store_true", help="Delete the user's submission after confirmation")
    ap.add_argument("--admin", action="store_true", help="List all submissions of the assignment")
    ap.add_argument("--delete-id", type=int, default=0, help="Admin: delete this submission after confirmation")
    args = ap.parse_args()

    if not Config.validate():
        logger.error(f"❌ SUBMISSIONS_API_BASE_URL is not a valid URL: {Config.SUBMISSIONS_API_BASE_URL!r}")
        return 2

    if args.admin:
        return asyncio.run(list_assignment_submissions(args.assignment, args.delete_id))
    if not args.user:
        ap.error("--user is required unless --admin is given")
    return asyncio.run(check_user_submission(args.user, args.assignment, args.delete))


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except KeyboardInterrupt:
        logger.info("Остановка...")
