"""Text and binary encodings of the comment sentiment result.

The text format is one YAML-like line per day. The binary format is an
Apache Arrow IPC stream, a sequence of length-prefixed messages holding one
record batch with a row per day.
"""

from __future__ import annotations

from typing import BinaryIO, TextIO

import pyarrow as pa

from .models import CommentSentimentResult, DaySentiment

SENTIMENT_SCHEMA = pa.schema(
    [
        pa.field("day", pa.int32(), nullable=False),
        pa.field("score", pa.float32(), nullable=False),
        pa.field("comments", pa.list_(pa.string()), nullable=False),
        pa.field("commits", pa.list_(pa.string()), nullable=False),
    ]
)


def format_day(day: int, value: DaySentiment) -> str:
    """Render a single day as a text line."""
    commits = ",".join(value.commits)
    comments = "|".join(value.comments)
    return f'  {day}: [{value.score:.4f}, [{commits}], "{comments}"]\n'


def serialize_text(result: CommentSentimentResult, writer: TextIO) -> None:
    for day in result.sorted_days():
        writer.write(format_day(day, result.days[day]))


def to_table(result: CommentSentimentResult) -> pa.Table:
    days = result.sorted_days()
    return pa.Table.from_pydict(
        {
            "day": days,
            "score": [result.days[day].score for day in days],
            "comments": [result.days[day].comments for day in days],
            "commits": [result.days[day].commits for day in days],
        },
        schema=SENTIMENT_SCHEMA,
    )


def to_bytes(result: CommentSentimentResult) -> bytes:
    sink = pa.BufferOutputStream()
    with pa.ipc.new_stream(sink, SENTIMENT_SCHEMA) as stream:
        stream.write_table(to_table(result))
    return sink.getvalue().to_pybytes()


def serialize_binary(result: CommentSentimentResult, writer: BinaryIO) -> None:
    writer.write(to_bytes(result))


def deserialize_binary(data: bytes) -> CommentSentimentResult:
    """Read back a result written by serialize_binary."""
    table = pa.ipc.open_stream(pa.py_buffer(data)).read_all()
    result = CommentSentimentResult()
    for row in table.to_pylist():
        result.days[row["day"]] = DaySentiment(
            score=row["score"],
            comments=row["comments"],
            commits=row["commits"],
        )
    return result
