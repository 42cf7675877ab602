"""Split streamed assistant text into reasoning and final answer.

The model may emit a reasoning region wrapped in <think>...</think> before
its answer. `segment` is a pure projection of the (possibly partial) buffer
and is re-run on every streamed chunk, so it keeps no state between calls.
"""

from dataclasses import dataclass

from ..config import THINK_END, THINK_START


@dataclass(frozen=True)
class SegmentedContent:
    """Reasoning/answer view of an assistant message."""

    thinking: str
    final_response: str
    is_complete: bool

    @property
    def shows_thinking(self) -> bool:
        """Whether a renderer should display the reasoning block."""
        return bool(self.thinking) or not self.is_complete

    @property
    def shows_answer(self) -> bool:
        """Whether a renderer should display the final answer."""
        return self.is_complete and bool(self.final_response)


def segment(content: str) -> SegmentedContent:
    """Segment assistant content around the reasoning markers.

    - End marker present: split at its first occurrence. The part before it
      (start marker removed) is the reasoning, the rest is the answer. Later
      occurrences of the end marker stay in the answer verbatim.
    - Only the start marker: everything is reasoning, still streaming.
    - No markers: the whole content is the answer, untouched.

    Args:
        content: Current assistant buffer

    Returns:
        SegmentedContent for the buffer
    """
    if THINK_END in content:
        thinking, *rest = content.split(THINK_END)
        return SegmentedContent(
            thinking=thinking.replace(THINK_START, "", 1).strip(),
            final_response=THINK_END.join(rest).strip(),
            is_complete=True,
        )

    if THINK_START in content:
        return SegmentedContent(
            thinking=content.replace(THINK_START, "", 1).strip(),
            final_response="",
            is_complete=False,
        )

    return SegmentedContent(thinking="", final_response=content, is_complete=True)
