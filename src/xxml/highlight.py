"""Pygments lexer for XXML documents."""

from pygments.lexer import RegexLexer, bygroups, words
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
)


class XXMLLexer(RegexLexer):
    """Pygments lexer for XXML configuration documents."""

    name = "XXML"
    aliases = ["xxml"]
    filenames = ["*.xxml"]
    mimetypes = ["text/x-xxml"]

    tokens = {
        "root": [
            # Whitespace
            (r"\s+", Text),
            # Line comments (// ...)
            (r"//.*$", Comment.Single),
            # Namespace header: [<Name>
            (
                r"(\[)(\s*)(<)(\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*)(>)",
                bygroups(Punctuation, Text, Punctuation, Text, Name.Namespace, Text, Punctuation),
            ),
            # Tag header: <Name =
            (
                r"(<)(\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*)(=)",
                bygroups(Punctuation, Text, Name.Tag, Text, Operator),
            ),
            # Strings; a backslash takes the next character literally
            (r'"', String, "string"),
            # Booleans, including the legacy digit spellings
            (words(("116114117101", "10297108115101"), suffix=r"(?![0-9.])"), Keyword.Constant),
            (words(("true", "false"), prefix=r"\b", suffix=r"\b"), Keyword.Constant),
            # Numbers
            (r"-?[0-9]*\.[0-9]+", Number.Float),
            (r"-?[0-9]+\.?", Number.Float),
            # Variables
            (r"[A-Za-z_][A-Za-z0-9_]*", Name.Variable),
            (r"=", Operator),
            (r"[<>\[\]{},]", Punctuation),
            # Anything else is ignored by the language
            (r".", Text),
        ],
        "string": [
            (r'\\.', String.Escape),
            (r'"', String, "#pop"),
            (r'[^"\\]+', String),
        ],
    }
