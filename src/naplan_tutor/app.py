"""Interactive CLI application."""
import logging
import os
import sys
import time
from typing import Callable, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from naplan_tutor.bank import QuestionBank, get_question_bank
from naplan_tutor.dashboard import (
    get_domain_summary, get_level_stars, get_mastery_color, get_mastery_label,
    get_stats, get_weak_subskills,
)
from naplan_tutor.db import DEFAULT_DB_PATH
from naplan_tutor.models import DOMAINS, MissionResult, Profile, Question
from naplan_tutor.scheduler import Scheduler
from naplan_tutor.session import (
    ANSWERABLE, AnswerOutcome, MissionEngine, SessionListener, SessionState,
)
from naplan_tutor.storage import Storage, StorageError
from naplan_tutor.timer import (
    DEFAULT_SESSION_MINUTES, create_timer_state, format_remaining_time, is_expired,
    should_show_warning, update_timer_state,
)

console = Console()
logger = logging.getLogger(__name__)

LETTERS = ["a", "b", "c", "d"]
MISSION_SIZES = ["10", "20", "30"]
DOMAIN_LABELS = {
    "numeracy": "Numeracy",
    "reading": "Reading",
    "conventions": "Grammar & Spelling",
    "writing": "Writing",
}


class SessionExitRequested(Exception):
    """The learner asked to leave the current mission."""


def session_prompt(prompt: str, **kwargs) -> str:
    """Prompt.ask that raises SessionExitRequested on 'q' or 'menu'."""
    answer = Prompt.ask(prompt, **kwargs)
    if answer.strip().lower() in ("q", "menu"):
        raise SessionExitRequested()
    return answer


def setup_logging() -> None:
    level = os.environ.get("NAPLAN_TUTOR_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


class ConsoleListener(SessionListener):
    def __init__(self, header: Callable[[], str] = lambda: ""):
        self.header = header

    def on_question(self, question: Question, index: int, total: int) -> None:
        console.print()
        console.print(f"[dim]{self.header()}[/dim]")
        console.print(Panel(question.prompt, title=f"Question {index + 1}/{total}", border_style="cyan"))
        for letter, choice in zip(LETTERS, question.choices):
            console.print(f"  [cyan]{letter})[/cyan] {choice}")

    def on_hint(self, question: Question, hint: str) -> None:
        console.print(f"[yellow]Hint:[/yellow] {hint}")

    def on_feedback(self, question: Question, outcome: AnswerOutcome) -> None:
        if outcome.is_correct:
            console.print(f"[green]Correct![/green] +{outcome.gems_awarded} gems")
        elif outcome.state == SessionState.AWAITING_RETRY:
            console.print("[yellow]Nice try - have one more go.[/yellow]")
            return
        else:
            console.print(
                f"[red]Good effort - let's learn it.[/red] Answer: [green]{outcome.revealed_answer}[/green]"
                f" (+{outcome.gems_awarded} gems)"
            )
        if outcome.explanation:
            console.print(f"[dim]{outcome.explanation}[/dim]")

    def on_countdown(self, seconds_left: int) -> None:
        if seconds_left > 0:
            console.print(f"[dim]Auto-next in {seconds_left}s (Ctrl-C to skip)[/dim]")

    def on_complete(self, result: MissionResult) -> None:
        show_results(result)


def show_results(result: MissionResult) -> None:
    console.print(Panel(
        f"You got [bold]{result.correct_count}[/bold] out of [bold]{result.total}[/bold] correct.\n"
        f"You earned [bold]{result.gem_count}[/bold] gems this mission.\n"
        f"Level: {result.level} → {result.new_level}",
        title="Mission Complete!", border_style="green",
    ))


def show_welcome(name: str) -> None:
    console.print(Panel(
        f"[bold]NAPLAN Mission[/bold]\n[dim]Welcome back, {name}![/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu(has_session: bool) -> None:
    console.print("\n[bold]Commands:[/bold]")
    commands = [("mission", "Start a new mission")]
    if has_session:
        commands.append(("resume", "Resume last mission"))
    commands += [
        ("dashboard", "Levels, gems and mastery"),
        ("settings", "Change your settings"),
        ("reset", "Start a new profile"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def wait_for_auto_advance(engine: MissionEngine, sleep: Callable[[float], None] = time.sleep) -> None:
    """Let the countdown run; Ctrl-C moves on straight away."""
    try:
        while engine.state == SessionState.CORRECT:
            sleep(0.25)
            engine.scheduler.run_due()
    except KeyboardInterrupt:
        if engine.state == SessionState.CORRECT:
            engine.advance()


def run_mission(
    engine: MissionEngine,
    listener: ConsoleListener,
    session_minutes: float = DEFAULT_SESSION_MINUTES,
    sleep: Callable[[float], None] = time.sleep,
) -> Optional[MissionResult]:
    """Drive an already started or resumed mission until it ends or is left."""
    now_ms = lambda: engine.scheduler.clock() * 1000
    timer = create_timer_state(session_minutes, now_ms())
    listener.header = lambda: (
        f"{DOMAIN_LABELS[engine.session.module]} | Level {engine.session.level} | "
        f"Gems {engine.session.gem_count} | Time left {format_remaining_time(timer)}"
    )
    if engine.state in ANSWERABLE:
        listener.on_question(engine.current_question, engine.session.q_index, engine.total)
    try:
        while engine.state != SessionState.COMPLETED:
            previous, timer = timer, update_timer_state(timer, now_ms())
            if should_show_warning(previous, timer):
                console.print("[yellow]One minute left in this mission![/yellow]")
            if is_expired(timer):
                engine.quit()
                console.print(Panel(
                    "You've been learning for a while. Your mission is saved - resume it after a break!",
                    title="Break Time!", border_style="yellow",
                ))
                return None
            if engine.state in ANSWERABLE:
                question = engine.current_question
                answer = session_prompt(
                    "\nYour answer ([cyan]h[/cyan]=hint, [cyan]q[/cyan]=save & quit)",
                    choices=LETTERS + ["h", "q"],
                )
                if answer == "h":
                    engine.show_hint()
                    continue
                engine.submit_answer(question.choices[LETTERS.index(answer)])
            elif engine.state == SessionState.CORRECT:
                wait_for_auto_advance(engine, sleep)
            else:
                session_prompt("[dim]Press Enter for the next question[/dim]", default="")
                engine.advance()
    except SessionExitRequested:
        engine.quit()
        console.print("[dim]Mission saved. Pick 'resume' to carry on.[/dim]")
        return None
    return engine.result


def make_engine(storage: Storage, bank: QuestionBank) -> MissionEngine:
    settings = storage.get_settings()
    return MissionEngine(
        storage, bank, Scheduler(), countdown_seconds=settings.auto_advance_speed
    )


def cmd_mission(storage: Storage, bank: QuestionBank) -> Optional[MissionResult]:
    progress = storage.get_progress()
    settings = storage.get_settings()
    console.print("\n[bold]Pick Your Mission![/bold]")
    for i, domain in enumerate(DOMAINS, 1):
        console.print(f"  [cyan]{i}[/cyan]) {DOMAIN_LABELS[domain]} [dim](Level {progress.level_for(domain)})[/dim]")
    choice = IntPrompt.ask("Select module", choices=[str(i) for i in range(1, len(DOMAINS) + 1)])
    domain = DOMAINS[choice - 1]
    default_size = str(settings.default_mission_size)
    size = IntPrompt.ask(
        "How many questions?",
        choices=MISSION_SIZES,
        default=default_size if default_size in MISSION_SIZES else "10",
    )
    engine = make_engine(storage, bank)
    engine.start(domain, size)
    listener = ConsoleListener()
    engine.listener = listener
    return run_mission(engine, listener)


def cmd_resume(storage: Storage, bank: QuestionBank) -> Optional[MissionResult]:
    engine = make_engine(storage, bank)
    if not engine.resume():
        console.print("[yellow]No mission to resume. Start a new one![/yellow]")
        return None
    listener = ConsoleListener()
    engine.listener = listener
    return run_mission(engine, listener)


def cmd_dashboard(storage: Storage, bank: QuestionBank) -> None:
    stats = get_stats(storage)
    console.print(Panel(
        f"Gems: [bold]{stats['total_gems']}[/bold]  |  Answers: [bold]{stats['answers']}[/bold]  |  "
        f"Accuracy: [bold]{stats['accuracy']}%[/bold]",
        title="Dashboard", border_style="blue",
    ))
    table = Table(title="Modules")
    table.add_column("Module", style="cyan")
    table.add_column("Level")
    table.add_column("Mastered", justify="right")
    table.add_column("Learning", justify="right")
    table.add_column("To review", justify="right")
    for row in get_domain_summary(storage, bank):
        table.add_row(
            DOMAIN_LABELS[row["domain"]],
            get_level_stars(row["level"]),
            f"{row['mastered']}/{row['subskills']}",
            str(row["learning"]),
            str(row["review_queue"]),
        )
    console.print(table)

    mastery = storage.all_mastery()
    if mastery:
        console.print("\n[bold]Skills:[/bold]")
        for skill, record in mastery.items():
            color = get_mastery_color(record.status)
            console.print(f"  [{color}]{get_mastery_label(record.status):<9}[/{color}] {skill}")

    weak = get_weak_subskills(storage)
    if weak:
        console.print(f"\n  [yellow]Practise more: {weak[0]['subskill']} ({weak[0]['score']}%)[/yellow]")


def cmd_settings(storage: Storage) -> None:
    settings = storage.get_settings()
    profile = storage.get_profile()
    name = Prompt.ask("Your name", default=profile.nickname if profile else settings.child_name)
    settings.child_name = name
    settings.sound_on = Confirm.ask("Sound effects?", default=settings.sound_on)
    settings.default_mission_size = IntPrompt.ask(
        "Default mission length", choices=["5", "10", "15", "20", "30"],
        default=str(settings.default_mission_size),
    )
    settings.auto_advance_speed = IntPrompt.ask(
        "Seconds before auto-next", choices=["3", "5", "8", "10"],
        default=str(settings.auto_advance_speed),
    )
    storage.set_settings(settings)
    storage.set_profile(Profile(nickname=name))
    console.print("[green]Settings saved![/green]")


def cmd_reset(storage: Storage) -> None:
    profile = storage.get_profile()
    name = profile.nickname if profile else "Student"
    if Confirm.ask(f"This deletes all levels and gems for {name}. Are you sure?", default=False):
        storage.reset_progress()
        console.print("[green]Fresh start! All levels are back to 1.[/green]")


def ensure_profile(storage: Storage) -> Profile:
    profile = storage.get_profile()
    if profile is None:
        console.print(Panel("[bold]Welcome to NAPLAN Mission![/bold]\nLet's get ready!", border_style="blue"))
        name = ""
        while not name.strip():
            name = Prompt.ask("Enter your name")
        profile = Profile(nickname=name.strip())
        storage.set_profile(profile)
    return profile


def main(db_path: str = DEFAULT_DB_PATH):
    setup_logging()
    try:
        storage = Storage(db_path)
        profile = ensure_profile(storage)
    except StorageError as e:
        console.print(f"[red]Could not open your progress: {e}[/red]")
        sys.exit(1)
    bank = get_question_bank()
    show_welcome(profile.nickname)

    while True:
        try:
            has_session = storage.get_session() is not None
            show_menu(has_session)
            choice = Prompt.ask("\n[bold]>[/bold]", default="resume" if has_session else "mission").strip().lower()
            if choice == "mission":
                cmd_mission(storage, bank)
            elif choice == "resume":
                cmd_resume(storage, bank)
            elif choice == "dashboard":
                cmd_dashboard(storage, bank)
            elif choice == "settings":
                cmd_settings(storage)
            elif choice == "reset":
                cmd_reset(storage)
            elif choice in ("quit", "exit", "q"):
                console.print("[dim]See you next mission![/dim]")
                break
            else:
                console.print("[red]Unknown command. Try again.[/red]")
        except KeyboardInterrupt:
            console.print("\n[dim]Use 'quit' to exit.[/dim]")
        except StorageError as e:
            console.print(f"[red]Could not save your progress: {e}[/red]")


if __name__ == "__main__":
    main()
