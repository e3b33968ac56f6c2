"""Extraction of gettext calls from JavaScript files using Babel's extractor."""

from __future__ import annotations

from io import BytesIO
from typing import Dict, List, Optional, Sequence, Union

from babel.messages.extract import extract_javascript

from .base import Extractor
from .calls import TRANSLATOR_TAG, FunctionCall

JS_FUNCTIONS: Dict[str, str] = {
    "__": "text_domain",
    "_x": "text_context_domain",
    "_n": "single_plural_number_domain",
    "_nx": "single_plural_number_context_domain",
}

_BABEL_OPTIONS = {"encoding": "utf-8", "jsx": True, "template_string": True}


class JsExtractor(Extractor):
    """Finds ``@wordpress/i18n`` calls, bare or through ``wp.i18n``."""

    name = "javascript"
    extensions = ("js",)
    functions = JS_FUNCTIONS

    def find_calls(self, text: str) -> List[FunctionCall]:
        calls: List[FunctionCall] = []
        for line, funcname, messages, comments in extract_javascript(
            BytesIO(text.encode("utf-8")),
            list(self.functions),
            [TRANSLATOR_TAG],
            _BABEL_OPTIONS,
        ):
            calls.append(
                FunctionCall(
                    name=funcname,
                    line=line,
                    arguments=_arguments(messages),
                    comment=" ".join(comments) or None,
                )
            )
        return calls


def _arguments(messages: Union[str, Sequence[Optional[str]], None]) -> List[Optional[str]]:
    if messages is None:
        return []
    if isinstance(messages, str):
        return [messages]
    return list(messages)


__all__ = ["JS_FUNCTIONS", "JsExtractor"]
