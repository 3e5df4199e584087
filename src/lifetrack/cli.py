"""Command line interface for LifeTrack."""

from __future__ import annotations

import time as _time
from datetime import date, datetime
from pathlib import Path

import click

from .context import AppContext, create_app_context
from .logging_config import setup_logging
from .models import BudgetPeriod, Expense, Habit, HabitFrequency, Task, TaskStatus
from .services import budgeting, calendar_grid, dashboard, habits, periods, reminders, reports, tasks

DATE = click.DateTime(formats=["%Y-%m-%d"])
DATETIME = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M"])
MONTH = click.DateTime(formats=["%Y-%m"])
AMOUNT = click.FloatRange(min=0, min_open=True)
PERIODS = click.Choice([p.value for p in BudgetPeriod], case_sensitive=False)

pass_app = click.make_pass_decorator(AppContext)


def _non_empty(ctx: click.Context, param: click.Parameter, value: str) -> str:
    text = (value or "").strip()
    if not text:
        raise click.BadParameter("must not be empty")
    return text


def _require_habit(app: AppContext, name: str) -> Habit:
    habit = app.habit_repo.get_by_name(name)
    if habit is None:
        raise click.ClickException(f"No habit named '{name}'")
    return habit


def _window(app: AppContext, period: str, start: datetime | None, end: datetime | None):
    # Picker dates cover whole days.
    return periods.resolve_period(
        period,
        start=start.date() if start else None,
        end=end.date() if end else None,
        first_weekday=app.first_weekday,
    )


def _money(app: AppContext, amount: float) -> str:
    return f"{app.config.CURRENCY}{amount:,.2f}"


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track habits, tasks, expenses and payment reminders."""

    if ctx.obj is None:
        app = create_app_context()
        setup_logging(app.config)
        ctx.obj = app


@cli.command("init-db")
@pass_app
def init_db(app: AppContext) -> None:
    """Create the database schema (idempotent)."""

    click.echo(f"Database ready at {app.config.DATABASE_URL}")


# ---------------------------------------------------------------- habits


@cli.group()
def habit() -> None:
    """Habits and their completions."""


@habit.command("add")
@click.argument("name", callback=_non_empty)
@click.option(
    "--frequency",
    type=click.Choice([f.value for f in HabitFrequency]),
    default=HabitFrequency.DAILY.value,
    show_default=True,
)
@pass_app
def habit_add(app: AppContext, name: str, frequency: str) -> None:
    """Add a new habit."""

    if app.habit_repo.get_by_name(name) is not None:
        raise click.ClickException(f"Habit '{name}' already exists")
    created = app.habit_repo.create(Habit(name=name, frequency=HabitFrequency(frequency)))
    click.echo(f"Added habit #{created.id}: {created.name}")


@habit.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived habits")
@pass_app
def habit_list(app: AppContext, include_archived: bool) -> None:
    """List habits with their streaks."""

    rows = app.habit_repo.list_all(include_archived=include_archived)
    if not rows:
        click.echo("No habits yet.")
        return
    today = date.today()
    for item in rows:
        current, longest = habits.habit_streaks(item, today=today)
        done = "x" if habits.is_completed_on(item, today) else " "
        archived = " (archived)" if item.is_archived else ""
        click.echo(
            f"[{done}] {item.name}{archived}  {item.frequency.value}  "
            f"streak {current} / best {longest}  {habits.growth_stage(current)}"
        )


@habit.command("done")
@click.argument("name")
@click.option("--on", "on", type=DATE, default=None, help="Day to toggle (default today)")
@pass_app
def habit_done(app: AppContext, name: str, on: datetime | None) -> None:
    """Toggle a habit's completion for a day."""

    item = _require_habit(app, name)
    day = on.date() if on else date.today()
    completed = app.habit_repo.toggle_completion(item.id, on=day)
    state = "completed" if completed else "not completed"
    click.echo(f"{item.name} marked {state} for {day.isoformat()}")


@habit.command("streak")
@click.argument("name")
@pass_app
def habit_streak(app: AppContext, name: str) -> None:
    """Show current and longest streak."""

    item = _require_habit(app, name)
    current, longest = habits.habit_streaks(item)
    click.echo(f"Current streak: {current} days")
    click.echo(f"Longest streak: {longest} days")
    click.echo(f"Total completions: {len(item.completions)}")


@habit.command("calendar")
@click.argument("name")
@click.option("--month", type=MONTH, default=None, help="Month as YYYY-MM (default current)")
@pass_app
def habit_calendar(app: AppContext, name: str, month: datetime | None) -> None:
    """Print a month calendar with completed days starred."""

    item = _require_habit(app, name)
    reference = month.date() if month else date.today()
    weeks = calendar_grid.mark_weeks(
        calendar_grid.month_weeks(reference, first_weekday=app.first_weekday),
        (c.completed_at for c in item.completions),
    )
    click.echo(reference.strftime("%B %Y").center(28))
    click.echo(" ".join(f"{label:>3}" for label in calendar_grid.weekday_labels(app.first_weekday)))
    for week in weeks:
        cells = []
        for cell in week:
            if cell.is_blank:
                cells.append("   ")
            else:
                cells.append(f"{cell.day.day:>2}{'*' if cell.marked else ' '}")
        click.echo(" ".join(cells))


@habit.command("archive")
@click.argument("name")
@click.option("--restore", is_flag=True, help="Un-archive instead")
@pass_app
def habit_archive(app: AppContext, name: str, restore: bool) -> None:
    """Archive (or restore) a habit."""

    item = _require_habit(app, name)
    app.habit_repo.set_archived(item.id, archived=not restore)
    click.echo(f"{item.name} {'restored' if restore else 'archived'}")


@habit.command("delete")
@click.argument("name")
@click.confirmation_option(prompt="Delete the habit and all its completions?")
@pass_app
def habit_delete(app: AppContext, name: str) -> None:
    """Delete a habit and its history."""

    item = _require_habit(app, name)
    app.habit_repo.delete(item.id)
    click.echo(f"Deleted {item.name}")


# ---------------------------------------------------------------- tasks


@cli.group()
def task() -> None:
    """Tasks with due dates and status."""


@task.command("add")
@click.argument("title", callback=_non_empty)
@click.option("--due", type=DATETIME, default=None, help="Due date (default now)")
@click.option("--description", default=None)
@click.option("--tags", default="", help="Comma separated tags")
@pass_app
def task_add(app: AppContext, title: str, due: datetime | None, description: str | None, tags: str) -> None:
    """Add a task."""

    created = app.task_repo.create(
        Task(
            title=title,
            due_at=due or datetime.now(),
            description=description,
            tags=tags,
            priority=app.task_repo.next_priority(),
        )
    )
    click.echo(f"Added task #{created.id}: {created.title}")


@task.command("list")
@click.option(
    "--status",
    type=click.Choice([s.value for s in tasks.StatusFilter]),
    default=tasks.StatusFilter.ALL.value,
    show_default=True,
)
@click.option("--period", type=PERIODS, default=None, help="Only tasks due in this period")
@click.option("--start", type=DATE, default=None)
@click.option("--end", type=DATE, default=None)
@pass_app
def task_list(app: AppContext, status: str, period: str | None, start, end) -> None:
    """List tasks, ordered by priority."""

    window = _window(app, period, start, end) if period else None
    rows = tasks.filter_tasks(
        app.task_repo.list_all(), status_filter=tasks.StatusFilter(status), window=window
    )
    if not rows:
        click.echo("No tasks.")
        return
    for item in rows:
        tag_text = f"  [{', '.join(item.tag_list)}]" if item.tag_list else ""
        click.echo(
            f"#{item.id} {item.title}  due {item.due_at:%Y-%m-%d %H:%M}  {item.status.value}{tag_text}"
        )


@task.command("status")
@click.argument("task_id", type=int)
@click.argument("status", type=click.Choice([s.value for s in TaskStatus]))
@pass_app
def task_status(app: AppContext, task_id: int, status: str) -> None:
    """Set a task's status."""

    updated = app.task_repo.set_status(task_id, TaskStatus(status))
    if updated is None:
        raise click.ClickException(f"No task #{task_id}")
    click.echo(f"#{updated.id} is now {updated.status.value}")


@task.command("move")
@click.argument("task_id", type=int)
@click.argument("position", type=click.IntRange(min=0))
@pass_app
def task_move(app: AppContext, task_id: int, position: int) -> None:
    """Move a task to a new position in the manual ordering."""

    ordered = sorted(app.task_repo.list_all(), key=lambda t: (t.priority, t.due_at))
    index = next((i for i, t in enumerate(ordered) if t.id == task_id), None)
    if index is None:
        raise click.ClickException(f"No task #{task_id}")
    app.task_repo.save_all(tasks.move_task(ordered, index, position))
    click.echo(f"Moved #{task_id} to position {position}")


@task.command("delete")
@click.argument("task_id", type=int)
@pass_app
def task_delete(app: AppContext, task_id: int) -> None:
    """Delete a task."""

    if app.task_repo.get_by_id(task_id) is None:
        raise click.ClickException(f"No task #{task_id}")
    app.task_repo.delete(task_id)
    click.echo(f"Deleted task #{task_id}")


# ---------------------------------------------------------------- expenses


@cli.group()
def expense() -> None:
    """Expenses."""


@expense.command("add")
@click.argument("amount", type=AMOUNT)
@click.argument("category", callback=_non_empty)
@click.option("--mode", "payment_mode", default="", help="Payment mode, e.g. Cash or UPI")
@click.option("--note", default="")
@click.option("--on", "occurred_at", type=DATETIME, default=None, help="When (default now)")
@pass_app
def expense_add(
    app: AppContext, amount: float, category: str, payment_mode: str, note: str, occurred_at
) -> None:
    """Record an expense."""

    created = app.expense_repo.create(
        Expense(
            amount=amount,
            category=category,
            payment_mode=payment_mode,
            note=note,
            occurred_at=occurred_at or datetime.now(),
        )
    )
    click.echo(f"Added expense #{created.id}: {_money(app, created.amount)} on {created.category}")


@expense.command("list")
@click.option("--period", type=PERIODS, default=BudgetPeriod.MONTH.value, show_default=True)
@click.option("--start", type=DATE, default=None)
@click.option("--end", type=DATE, default=None)
@pass_app
def expense_list(app: AppContext, period: str, start, end) -> None:
    """List expenses in a period."""

    window = _window(app, period, start, end)
    rows = app.expense_repo.filter_by_date_range(window.start, window.end)
    for item in rows:
        note = f"  {item.note}" if item.note else ""
        click.echo(f"#{item.id} {item.occurred_at:%Y-%m-%d}  {item.category}  {_money(app, item.amount)}{note}")
    click.echo(f"Total: {_money(app, budgeting.total_spent(rows, window))}")


@expense.command("delete")
@click.argument("expense_id", type=int)
@pass_app
def expense_delete(app: AppContext, expense_id: int) -> None:
    """Delete an expense."""

    if app.expense_repo.get_by_id(expense_id) is None:
        raise click.ClickException(f"No expense #{expense_id}")
    app.expense_repo.delete(expense_id)
    click.echo(f"Deleted expense #{expense_id}")


# ---------------------------------------------------------------- budgets


@cli.group()
def budget() -> None:
    """Budget categories, insights and charts."""


@budget.command("set")
@click.argument("name", callback=_non_empty)
@click.argument("amount", type=click.FloatRange(min=0))
@click.option("--period", type=PERIODS, default=BudgetPeriod.MONTH.value, show_default=True)
@click.option("--start", type=DATE, default=None, help="Custom period start")
@click.option("--end", type=DATE, default=None, help="Custom period end")
@pass_app
def budget_set(app: AppContext, name: str, amount: float, period: str, start, end) -> None:
    """Create or update a budget category."""

    if start and end and start > end:
        raise click.BadParameter("start must be before end")
    category = app.budget_repo.upsert(
        name,
        amount,
        period=BudgetPeriod(period),
        start_date=start.date() if start else None,
        end_date=end.date() if end else None,
    )
    click.echo(f"Budget for {category.name} ({category.period.value}): {_money(app, category.budget_amount)}")


def _budget_scope(app: AppContext, period: str, start, end):
    categories = budgeting.categories_for_period(app.budget_repo.list_all(), period)
    if BudgetPeriod(period) is BudgetPeriod.CUSTOM and not (start and end):
        # Each custom category is measured between its own stored dates.
        return None, categories, app.expense_repo.list_all()
    window = _window(app, period, start, end)
    expenses = app.expense_repo.filter_by_date_range(window.start, window.end)
    return window, categories, expenses


@budget.command("list")
@click.option("--period", type=PERIODS, default=BudgetPeriod.MONTH.value, show_default=True)
@click.option("--start", type=DATE, default=None)
@click.option("--end", type=DATE, default=None)
@pass_app
def budget_list(app: AppContext, period: str, start, end) -> None:
    """Show spend against each budget."""

    window, categories, expenses = _budget_scope(app, period, start, end)
    if not categories:
        click.echo("No budget categories set up yet.")
        return
    for spend in budgeting.spent_by_category(
        categories, expenses, window, first_weekday=app.first_weekday
    ):
        click.echo(
            f"{spend.name}: {_money(app, spend.spent)} / {_money(app, spend.budget)} ({spend.percent}%)"
        )


@budget.command("insights")
@click.option("--period", type=PERIODS, default=BudgetPeriod.MONTH.value, show_default=True)
@click.option("--start", type=DATE, default=None)
@click.option("--end", type=DATE, default=None)
@pass_app
def budget_insights(app: AppContext, period: str, start, end) -> None:
    """Print budget insights for a period."""

    window, categories, expenses = _budget_scope(app, period, start, end)
    label = BudgetPeriod(period).label
    tips = budgeting.generate_insights(
        categories, expenses, window, period_label=label, first_weekday=app.first_weekday
    )
    for tip in tips:
        click.echo(tip)


@budget.command("chart")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--period", type=PERIODS, default=BudgetPeriod.MONTH.value, show_default=True)
@click.option("--start", type=DATE, default=None)
@click.option("--end", type=DATE, default=None)
@pass_app
def budget_chart(app: AppContext, output: Path, period: str, start, end) -> None:
    """Export a spending donut chart as PNG."""

    window = _window(app, period, start, end)
    expenses = app.expense_repo.filter_by_date_range(window.start, window.end)
    path = reports.export_spending_png(
        budgeting.chart_data(expenses, window), output_path=output, currency=app.config.CURRENCY
    )
    click.echo(f"Chart written: {path}")


# ---------------------------------------------------------------- reminders


@cli.group()
def reminder() -> None:
    """Payment reminders."""


@reminder.command("add")
@click.argument("name", callback=_non_empty)
@click.option("--due", "due_dates", type=DATETIME, multiple=True, required=True, help="Due date; repeatable")
@click.option("--amount", type=AMOUNT, default=None)
@click.option("--recurring", is_flag=True, help="Repeat every month")
@pass_app
def reminder_add(app: AppContext, name: str, due_dates, amount: float | None, recurring: bool) -> None:
    """Add a payment reminder and schedule its alerts."""

    created = app.reminder_repo.create(name, due_dates, amount=amount, is_recurring=recurring)
    app.notifier.schedule(created)
    click.echo(f"Added reminder #{created.id}: {created.name}")


@reminder.command("upcoming")
@pass_app
def reminder_upcoming(app: AppContext) -> None:
    """List reminders due from today on, soonest first."""

    rows = reminders.upcoming_reminders(app.reminder_repo.list_all())
    if not rows:
        click.echo("No upcoming payments.")
        return
    today = date.today()
    for item in rows:
        amount = f"  {_money(app, item.reminder.amount)}" if item.reminder.amount else ""
        click.echo(
            f"#{item.reminder.id} {item.reminder.name}  due {item.due_at:%Y-%m-%d} "
            f"(in {item.days_until(today)} days){amount}"
        )


@reminder.command("paid")
@click.argument("reminder_id", type=int)
@pass_app
def reminder_paid(app: AppContext, reminder_id: int) -> None:
    """Mark a reminder as paid for this month and cancel its alerts."""

    cleared = app.reminder_repo.mark_cleared(reminder_id)
    if cleared is None:
        raise click.ClickException(f"No reminder #{reminder_id}")
    app.notifier.cancel(cleared)
    click.echo(f"{cleared.name} marked as paid")


@reminder.command("delete")
@click.argument("reminder_id", type=int)
@pass_app
def reminder_delete(app: AppContext, reminder_id: int) -> None:
    """Delete a reminder and cancel its alerts."""

    existing = app.reminder_repo.get_by_id(reminder_id)
    if existing is None:
        raise click.ClickException(f"No reminder #{reminder_id}")
    app.notifier.cancel(existing)
    app.reminder_repo.delete(reminder_id)
    click.echo(f"Deleted reminder #{reminder_id}")


@reminder.command("watch")
@pass_app
def reminder_watch(app: AppContext) -> None:
    """Run the alert scheduler in the foreground until interrupted.

    Reminders added, paid or deleted from other shells are picked up on the
    next resync.
    """

    queued = app.notifier.watch(
        app.reminder_repo.list_all, interval_seconds=app.config.REMINDER_RESYNC_SECONDS
    )
    click.echo(f"Watching {queued} alert(s). Press Ctrl+C to stop.")
    app.notifier.start()
    try:
        while True:
            _time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        app.notifier.stop()


# ---------------------------------------------------------------- dashboard


@cli.command("dashboard")
@pass_app
def dashboard_cmd(app: AppContext) -> None:
    """Today's progress plus a quote."""

    summary = dashboard.build_summary(
        app.habit_repo.list_all(),
        app.task_repo.list_all(),
        app.budget_repo.list_all(BudgetPeriod.MONTH),
        app.expense_repo.list_all(),
    )
    click.echo(str(app.quotes.next_quote()))
    click.echo("")
    click.echo(f"Habits  {summary.habits_done}/{summary.habits_total}  {summary.habits_progress:.0%}")
    click.echo(f"Tasks   {summary.tasks_done}/{summary.tasks_total}  {summary.tasks_progress:.0%}")
    click.echo(
        f"Budget  {_money(app, summary.budget_spent)}/{_money(app, summary.budget_total)}  "
        f"{summary.budget_progress:.0%}"
    )


def main() -> None:
    cli()
