"""これは「対話プロンプトで更新内容（タイトル/ファイル/説明/メモ）を集める」モジュールです。

プロンプトは PromptSpec の順序付きリストとして定義し、1つのルーチン（run_prompts）が
LineSource（"1行読む" の抽象）から順に回答を読みます。端末・ファイル・テストの台本の
どれからでも同じ順序の回答を流し込めます。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, TextIO

from loguru import logger

from devlog.core.errors import InputExhausted
from devlog.core.types import ChangeRecord, PromptKind

DESCRIPTION_TERMINATOR = "."

Answers = dict[str, Any]
Echo = Callable[[str], None]


class LineSource(Protocol):
    def read_line(self, prompt: str) -> str: ...


class ConsoleInput:
    """端末（input()）から1行ずつ読む。"""

    def read_line(self, prompt: str) -> str:
        try:
            return input(prompt)
        except EOFError as e:
            raise InputExhausted("input closed before all prompts were answered") from e


class StreamInput:
    """任意のテキストストリーム（回答ファイルや StringIO）から1行ずつ読む。

    echo を渡すとプロンプト文字列をそこへ流す（端末と同じ見え方にしたいとき用）。
    """

    def __init__(self, stream: TextIO, echo: Echo | None = None) -> None:
        self._stream = stream
        self._echo = echo

    def read_line(self, prompt: str) -> str:
        if self._echo is not None and prompt:
            self._echo(prompt)
        line = self._stream.readline()
        if line == "":
            raise InputExhausted("answer stream ended before all prompts were answered")
        return line.rstrip("\r\n")


@dataclass(slots=True)
class PromptSpec:
    """1つのプロンプト定義。when が False を返すものはスキップされる。"""

    key: str
    text: str
    kind: PromptKind = PromptKind.LINE
    banner: Callable[[Answers], list[str]] | None = None  # 質問前に表示する行
    when: Callable[[Answers], bool] | None = None


def parse_file_list(raw: str) -> list[str]:
    """カンマ区切りの文字列を分割し、前後空白を除いて空要素を落とす。"""

    return [f.strip() for f in raw.split(",") if f.strip()]


def _is_yes(raw: str) -> bool:
    return raw.lower() == "y"


def _detected_banner(answers: Answers) -> list[str]:
    lines = ["", "Detected changed files:"]
    lines.extend(f"{i}. {f}" for i, f in enumerate(answers["detected_files"], start=1))
    return lines


def _description_banner(_: Answers) -> list[str]:
    return ["", f'Enter description (multi-line, end with a single dot "{DESCRIPTION_TERMINATOR}" on its own line):']


def build_prompt_plan() -> list[PromptSpec]:
    """これは何をする関数？
    → 質問の順番を定義したリストを返します（戻りはなし、一方通行）。
      - 検出ファイルがあれば一覧を見せて編集するか確認
      - 検出ファイルが無い、または編集を選んだときだけ手入力の一覧を聞く
    """

    return [
        PromptSpec("title", "Enter update title: "),
        PromptSpec(
            "edit_files",
            "Edit the file list? (y/n): ",
            kind=PromptKind.CONFIRM,
            banner=_detected_banner,
            when=lambda a: bool(a["detected_files"]),
        ),
        PromptSpec(
            "files",
            "Enter comma-separated list of files: ",
            kind=PromptKind.CSV,
            when=lambda a: not a["detected_files"] or a.get("edit_files", False),
        ),
        PromptSpec("description", "", kind=PromptKind.MULTILINE, banner=_description_banner),
        PromptSpec("notes", "Enter additional notes: "),
    ]


def _read_description(source: LineSource, prompt: str) -> str:
    description = ""
    while True:
        line = source.read_line(prompt)
        if line == DESCRIPTION_TERMINATOR:
            return description
        description += f"- {line}\n"


def run_prompts(
    specs: list[PromptSpec],
    source: LineSource,
    *,
    echo: Echo = print,
    context: Answers | None = None,
) -> Answers:
    """PromptSpec を先頭から順に処理し、key→回答 の dict を返す。

    context は when/banner から参照できる初期値（detected_files など）。
    入力が尽きたら InputExhausted がそのまま伝播する。
    """

    answers: Answers = dict(context or {})
    for spec in specs:
        if spec.when is not None and not spec.when(answers):
            continue
        if spec.banner is not None:
            for line in spec.banner(answers):
                echo(line)

        if spec.kind is PromptKind.MULTILINE:
            answers[spec.key] = _read_description(source, spec.text)
            continue

        raw = source.read_line(spec.text)
        if spec.kind is PromptKind.CONFIRM:
            answers[spec.key] = _is_yes(raw)
        elif spec.kind is PromptKind.CSV:
            answers[spec.key] = parse_file_list(raw)
        else:
            answers[spec.key] = raw
    return answers


def collect_change(source: LineSource, detected_files: list[str], *, echo: Echo = print) -> ChangeRecord:
    """これは何をする関数？
    → 対話で ChangeRecord を組み立てます。
      編集を断った場合は検出ファイル一覧をそのまま使います。
    """

    answers = run_prompts(build_prompt_plan(), source, echo=echo, context={"detected_files": list(detected_files)})
    files = answers["files"] if "files" in answers else answers["detected_files"]
    logger.debug("collected change title={!r} files={} notes_len={}", answers["title"], len(files), len(answers["notes"]))
    return ChangeRecord(
        title=answers["title"],
        files=files,
        description=answers["description"],
        notes=answers["notes"],
    )
