"""
properties 解析器 - 读取 config/agent.config

支持的语法：
- 以 # 或 ! 开头的注释行、空行
- key=value / key:value / key value
- 行尾奇数个反斜杠表示续行
- 转义：\\t \\n \\r \\f \\uXXXX，其余 \\x 即 x

使用方式：
    with open(path, "rb") as f:
        values = PropertiesParser().load(f)
"""

from __future__ import annotations

import re
from typing import BinaryIO, Iterator

from ..interfaces import IPropertiesParser, PropertiesParseError

# 与 java.util.Properties 的字节流读取一致
DEFAULT_ENCODING = "latin-1"

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_LINE_BREAK = re.compile(r"\r\n|\r|\n")
_HEX_DIGITS = re.compile(r"[0-9A-Fa-f]{4}")


def _natural_lines(text: str) -> Iterator[str]:
    yield from _LINE_BREAK.split(text)


def _ends_with_continuation(line: str) -> bool:
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    """合并续行，跳过空行与注释行"""
    pending: list[str] = []
    for raw in _natural_lines(text):
        line = raw.lstrip(_WHITESPACE)
        if not pending:
            if not line or line[0] in "#!":
                continue
        if _ends_with_continuation(line):
            pending.append(line[:-1])
            continue
        pending.append(line)
        yield "".join(pending)
        pending = []
    if pending:
        yield "".join(pending)


def _unescape(text: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue
        if i + 1 >= len(text):
            # 文件末尾残留的续行符
            break
        nxt = text[i + 1]
        if nxt == "u":
            digits = text[i + 2:i + 6]
            if not _HEX_DIGITS.fullmatch(digits):
                raise PropertiesParseError(f"Malformed \\uxxxx encoding: {text[i:i + 6]!r}")
            out.append(chr(int(digits, 16)))
            i += 6
            continue
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _split_key_value(line: str) -> tuple[str, str]:
    """定位 key 结束位置（第一个未转义的 = : 或空白）"""
    i = 0
    length = len(line)
    while i < length:
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1
    key = line[:i]

    # 跳过空白 + 至多一个分隔符 + 空白
    while i < length and line[i] in _WHITESPACE:
        i += 1
    if i < length and line[i] in _SEPARATORS:
        i += 1
    while i < length and line[i] in _WHITESPACE:
        i += 1
    return key, line[i:]


def parse_properties(text: str) -> dict[str, str]:
    """解析 properties 文本（重复 key 取最后一次的值）"""
    values: dict[str, str] = {}
    for line in _logical_lines(text):
        raw_key, raw_value = _split_key_value(line)
        values[_unescape(raw_key)] = _unescape(raw_value)
    return values


class PropertiesParser(IPropertiesParser):
    """properties 字节流解析器"""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    def load(self, stream: BinaryIO) -> dict[str, str]:
        data = stream.read()
        try:
            text = data.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise PropertiesParseError(f"配置文件编码错误({self.encoding}): {e}") from e
        return parse_properties(text)
