"""erudify command line interface."""

import dataclasses
import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from erudify.application.config import resolve_config
from erudify.domain.errors import ErudifyError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="erudify: sentence drills for learning Mandarin.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage erudify configuration.")
app.add_typer(config_app, name="config")


class OutputFormat(str, Enum):
    human = "human"
    csv = "csv"
    yaml = "yaml"


DictionaryOption = Annotated[
    Path | None,
    typer.Option("--dictionary", help="CC-CEDICT file. Defaults to 'dictionary_path' in config."),
]
FrequencyOption = Annotated[
    Path | None,
    typer.Option("--frequencies", help="Word frequency list ('word count' per line)."),
]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 1,
):
    """Global settings for erudify."""
    ctx.ensure_object(dict)
    ctx.obj["verbose_bonus"] = verbose
    if verbose > 1:
        logging.getLogger("erudify").setLevel(logging.DEBUG)


def _resolve(ctx: typer.Context, **overrides):
    obj = ctx.obj or {}
    return resolve_config({**overrides, "verbose": obj.get("verbose_bonus", 1)})


def _fail(err: Exception) -> NoReturn:
    typer.secho(f"Error: {err}", fg="red", err=True)
    raise typer.Exit(1)


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def convert(
    ctx: typer.Context,
    sentence_file: Annotated[
        Path, typer.Argument(help="Transcript of Chinese:/Pinyin:/English: blocks.")
    ],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write YAML here instead of stdout.")
    ] = None,
    lax_segmentation: Annotated[
        bool,
        typer.Option("--lax-segmentation", help="Allow matches that end inside a pinyin word."),
    ] = False,
    strict_pinyin: Annotated[
        bool, typer.Option("--strict-pinyin", help="Require tone marks on every word.")
    ] = False,
    dictionary: DictionaryOption = None,
):
    """[bold green]Convert[/bold green] a sentence transcript into drill records (YAML)."""
    from erudify.application.alignment import Aligner
    from erudify.application.factory import get_dictionary
    from erudify.application.transcript import iter_transcript, parse_transcript
    from erudify.infrastructure.persistence.records import dump_records, save_records

    config = _resolve(ctx, dictionary_path=dictionary)
    strict = config.strict_segmentation and not lax_segmentation
    loose_tones = config.loose_tones and not strict_pinyin

    try:
        aligner = Aligner(get_dictionary(config))
        text = sentence_file.read_text(encoding="utf-8")
        if output is not None:
            records = parse_transcript(text, aligner, strict=strict, loose_tones=loose_tones)
            save_records(output, records)
            typer.secho(f"Wrote {len(records)} records to {output}", fg="green", err=True)
        else:
            for record in iter_transcript(text, aligner, strict=strict, loose_tones=loose_tones):
                typer.echo(dump_records([record]), nl=False)
    except ErudifyError as e:
        _fail(e)


@app.command()
def train(
    ctx: typer.Context,
    word_file: Annotated[Path, typer.Argument(help="Target words, in teaching order.")],
    exercise_files: Annotated[list[Path], typer.Argument(help="Drill record YAML files.")],
    frequency_sort: Annotated[
        bool, typer.Option("--frequency-sort", help="Teach frequent words first.")
    ] = False,
    dictionary: DictionaryOption = None,
    frequencies: FrequencyOption = None,
):
    """[bold green]Train[/bold green]: type pinyin, '?' shows the answer, empty quits."""
    from erudify.application.factory import get_dictionary, get_learner_store
    from erudify.application.review import ReviewSession
    from erudify.application.scheduler import Scheduler
    from erudify.infrastructure.persistence.records import load_record_files

    config = _resolve(ctx, dictionary_path=dictionary, frequency_path=frequencies)
    try:
        store = get_learner_store(config)
        scheduler = Scheduler(store.load(), get_dictionary(config))
        word_list = scheduler.build_word_list(
            word_file.read_text(encoding="utf-8"), frequency_sort=frequency_sort
        )
        records = load_record_files(exercise_files)
    except ErudifyError as e:
        _fail(e)

    session = ReviewSession(scheduler, word_list, records, store)
    if not word_list or session.advance() is None:
        typer.secho("Nothing to drill: no record contains a target word.", fg="yellow")
        return

    try:
        while session.step is not None:
            _show_step(session)
            answer = typer.prompt("Pinyin", default="", show_default=False)
            if not answer.strip():
                break
            if answer.strip() == "?":
                typer.secho(f"Answer: {session.reveal()}", fg="yellow")
                continue

            finished = session.step.record
            result = session.submit(answer)
            if not result.correct:
                typer.secho(f"  {result.answer}", fg="red")
            elif result.step_finished:
                typer.secho(f"  {finished.full_reading()}", dim=True)
                typer.secho(f"  {finished.translation}\n", fg="cyan")
    except typer.Abort:
        typer.echo("")


def _show_step(session) -> None:
    step = session.step
    progress = session.scheduler.status(session.records, session.word_list, _now())
    typer.echo(
        f"Target word: {step.target_word}, known words: {progress.known_words}, "
        f"to review: {progress.words_to_review}, total: {progress.total_words}, "
        f"sentences: {progress.seen_records}/{progress.unlocked_records}"
    )
    typer.secho(f"Exercise score: {step.score}", dim=True)

    parts = []
    for nth, segment in enumerate(step.record.segments):
        if nth == step.index:
            parts.append(typer.style(segment.text, fg="yellow", bold=True))
        else:
            parts.append(segment.text)
    typer.echo("Chinese: " + "".join(parts))

    done = [s.reading.replace(" ", "") for s in step.record.segments[: step.index] if s.reading]
    if done:
        typer.secho("Pinyin:  " + " ".join(done), dim=True)


@app.command()
def status(
    ctx: typer.Context,
    word_file: Annotated[Path, typer.Argument(help="Target words.")],
    exercise_files: Annotated[list[Path], typer.Argument(help="Drill record YAML files.")],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
    dictionary: DictionaryOption = None,
):
    """Show progress against a word list."""
    from erudify.application.factory import get_dictionary, get_learner_store
    from erudify.application.scheduler import Scheduler
    from erudify.infrastructure.persistence.records import load_record_files

    config = _resolve(ctx, dictionary_path=dictionary)
    try:
        scheduler = Scheduler(get_learner_store(config).load(), get_dictionary(config))
        word_list = scheduler.build_word_list(word_file.read_text(encoding="utf-8"))
        records = load_record_files(exercise_files)
    except ErudifyError as e:
        _fail(e)

    result = scheduler.status(records, word_list, _now())

    if json_output:
        typer.echo(json.dumps(dataclasses.asdict(result), indent=2))
        return

    typer.echo(f"Words:     {result.total_words}")
    typer.secho(f"Known:     {result.known_words}", fg="green")
    typer.secho(f"To review: {result.words_to_review}", fg="yellow")
    typer.echo(f"Sentences: {result.seen_records}/{result.unlocked_records} seen/unlocked")


@app.command()
def tile(
    ctx: typer.Context,
    word_file: Annotated[Path, typer.Argument(help="Target words, in teaching order.")],
    exercise_files: Annotated[
        list[Path], typer.Option("--exercise-files", help="Drill record YAML files.")
    ],
    assumed_file: Annotated[
        Path | None, typer.Option("--assumed-file", help="Words the learner already knows.")
    ] = None,
    output_format: Annotated[
        OutputFormat, typer.Option("--output-format", help="human, csv or yaml.")
    ] = OutputFormat.human,
    frequency_sort: Annotated[
        bool, typer.Option("--frequency-sort", help="Teach frequent words first.")
    ] = False,
    dictionary: DictionaryOption = None,
    frequencies: FrequencyOption = None,
):
    """Pick, word by word, the sentences that introduce each word with nothing else new."""
    from erudify.application.curriculum import tile as tile_words
    from erudify.application.factory import get_dictionary
    from erudify.application.scheduler import Scheduler
    from erudify.infrastructure.persistence.records import dump_records, load_record_files

    config = _resolve(ctx, dictionary_path=dictionary, frequency_path=frequencies)
    try:
        scheduler = Scheduler(dictionary=get_dictionary(config))
        words = scheduler.build_word_list(
            word_file.read_text(encoding="utf-8"), frequency_sort=frequency_sort
        )
        assumed = (
            scheduler.build_word_list(assumed_file.read_text(encoding="utf-8"))
            if assumed_file
            else []
        )
        records = load_record_files(exercise_files)
    except ErudifyError as e:
        _fail(e)

    for plan in tile_words(words, records, assumed):
        if output_format is OutputFormat.human:
            typer.echo(plan.word)
            if not plan.ranked:
                typer.secho("  No exercises.", fg="red")
            elif plan.is_free:
                typer.secho("  Free: ", fg="green", nl=False)
                typer.echo(plan.accepted.translation)
            else:
                typer.secho("  Costly", fg="yellow")
                for record, cost in plan.ranked[:5]:
                    typer.echo(f"  {record.translation} {cost}")
        elif plan.accepted is not None:
            cost = plan.ranked[0][1]
            if output_format is OutputFormat.csv:
                typer.echo(
                    f"{cost.novel_words}/{cost.future_words}/{cost.extraneous_words}\t"
                    f"{plan.word}\t{plan.accepted.translation}\t{plan.accepted.full_text()}"
                )
            else:
                typer.echo(dump_records([plan.accepted]), nl=False)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = resolve_config()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))
