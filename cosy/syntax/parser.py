"""
Recursive descent parser for COSY syntax.

Builds a Value tree from the lexer's token stream. Newline and comment
tokens are significant here: newlines act as entry separators and runs of
comments are attached to the value that follows them.
"""

from ..errors import ParseError
from ..value import Value
from .interpolate import interpolate as interpolate_env
from .lexer import Token, TokenType, tokenize


class Parser:
    """
    Recursive descent parser for COSY.

    Grammar:
        value   := null | true | false | INTEGER | FLOAT | STRING | object | array
        object  := '{' (sep* entry sep*)* '}'
        entry   := key ':' value
        array   := '[' (sep* value sep*)* ']'
        sep     := ',' | NEWLINE
        key     := IDENTIFIER | STRING

    Entries need a comma only when no newline separates them; a trailing
    comma before the closing delimiter is allowed.
    """

    def __init__(self, tokens: list[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            last = tokens[-1] if tokens else None
            eof_line = last.line if last else 1
            eof_column = last.column if last else 1
            tokens = list(tokens) + [Token(TokenType.EOF, None, eof_line, eof_column)]
        self.tokens = tokens
        self.pos = 0

    @property
    def current_token(self) -> Token:
        return self.tokens[self.pos]

    def _advance(self) -> Token:
        """Advance to next token and return previous."""
        token = self.tokens[self.pos]
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self.current_token.type == token_type

    def _error(self, message: str) -> ParseError:
        token = self.current_token
        return ParseError(message, token.line, token.column)

    def _expect(self, token_type: TokenType, message: str) -> Token:
        """Expect current token to be of given type, advance and return it."""
        if not self._check(token_type):
            raise self._error(message)
        return self._advance()

    def _skip_layout(self) -> tuple[list[str], bool]:
        """
        Consume a run of newlines and comments.

        Returns:
            Collected comment texts and whether a newline was consumed
        """
        comments: list[str] = []
        saw_newline = False
        while True:
            if self._check(TokenType.NEWLINE):
                saw_newline = True
                self._advance()
            elif self._check(TokenType.COMMENT):
                comments.append(str(self._advance().value))
            else:
                return comments, saw_newline

    def parse(self) -> Value:
        """Parse a complete document."""
        comments, _ = self._skip_layout()
        value = self._parse_value(comments)

        # Trailing blank lines and comments are allowed
        self._skip_layout()

        if not self._check(TokenType.EOF):
            raise self._error("Unexpected tokens after value")

        return value

    def _parse_value(self, comments: list[str]) -> Value:
        """Parse any value, attaching the given leading comments."""
        more, _ = self._skip_layout()
        comments = comments + more

        token = self.current_token
        t = token.type

        if t == TokenType.LBRACE:
            return self._parse_object(comments)
        if t == TokenType.LBRACKET:
            return self._parse_array(comments)

        if t == TokenType.NULL:
            value = Value.null(comments)
        elif t == TokenType.TRUE:
            value = Value.boolean(True, comments)
        elif t == TokenType.FALSE:
            value = Value.boolean(False, comments)
        elif t == TokenType.INTEGER:
            value = Value.integer(int(token.value), comments)  # type: ignore[arg-type]
        elif t == TokenType.FLOAT:
            value = Value.float(float(token.value), comments)  # type: ignore[arg-type]
        elif t == TokenType.STRING:
            value = Value.string(str(token.value), comments)
        else:
            raise self._error(f"Expected value, found {token.describe()}")

        self._advance()
        return value

    def _parse_separator(self, closing: TokenType) -> tuple[list[str], bool, bool]:
        """
        Consume the separator after an entry or element.

        Returns:
            Comments seen (they belong to the next entry), whether a separator
            was present, and whether the closing delimiter was consumed
        """
        comments, has_separator = self._skip_layout()

        if self._check(TokenType.COMMA):
            self._advance()
            has_separator = True
            more, _ = self._skip_layout()
            comments.extend(more)

        if self._check(closing):
            self._advance()
            return comments, has_separator, True

        return comments, has_separator, False

    def _parse_key(self) -> str:
        token = self.current_token
        if token.type in (TokenType.IDENTIFIER, TokenType.STRING):
            self._advance()
            return str(token.value)
        raise self._error(
            f"Expected object key (identifier or string), found {token.describe()}"
        )

    def _parse_object(self, comments: list[str]) -> Value:
        """Parse an object; later duplicate keys overwrite in place."""
        self._expect(TokenType.LBRACE, "Expected '{' to start object")

        fields: dict[str, Value] = {}
        pending: list[str] = []

        while True:
            more, _ = self._skip_layout()
            pending.extend(more)

            if self._check(TokenType.RBRACE):
                # Comments before '}' have no value to attach to
                self._advance()
                break

            key = self._parse_key()
            self._expect(TokenType.COLON, "Expected ':' after object key")
            # dict assignment keeps the original insertion slot for duplicates
            fields[key] = self._parse_value(pending)

            pending, has_separator, closed = self._parse_separator(TokenType.RBRACE)
            if closed:
                break
            if not has_separator:
                raise self._error(
                    f"Expected ',' or '}}' in object, found {self.current_token.describe()}"
                )

        return Value.object(fields, comments)

    def _parse_array(self, comments: list[str]) -> Value:
        """Parse an array."""
        self._expect(TokenType.LBRACKET, "Expected '[' to start array")

        items: list[Value] = []
        pending: list[str] = []

        while True:
            more, _ = self._skip_layout()
            pending.extend(more)

            if self._check(TokenType.RBRACKET):
                self._advance()
                break

            items.append(self._parse_value(pending))

            pending, has_separator, closed = self._parse_separator(TokenType.RBRACKET)
            if closed:
                break
            if not has_separator:
                raise self._error(
                    f"Expected ',' or ']' in array, found {self.current_token.describe()}"
                )

        return Value.array(items, comments)


def parse(tokens: list[Token]) -> Value:
    """Parse a token list (as produced by tokenize) into a Value tree."""
    return Parser(tokens).parse()


def parse_string(source: str, interpolate: bool = False) -> Value:
    """
    Convenience function to parse a COSY document.

    Args:
        source: Document text
        interpolate: Expand ${VAR} references from the environment first

    Returns:
        Parsed Value tree

    Raises:
        LexError, ParseError, InterpolationError
    """
    if interpolate:
        source = interpolate_env(source)
    return parse(tokenize(source))
