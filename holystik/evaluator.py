"""
HolyStik Expression Evaluator
=============================
Evaluates infix expressions with a shunting-yard pass followed by a
postfix (RPN) evaluation over a value stack.

One algorithm serves both callers: statements that need a number for a
draw argument or assignment, and ternary conditions that compare values
into a boolean. Precedence:

    * /                    2
    + -                    1
    == != < > <= >=        0

All operators are left-associative. Parentheses nest to any depth.
"""
from typing import Sequence

from .errors import DivisionByZero, StikRuntimeError, StikSyntaxError
from .lexer import ARITHMETIC_OPERATORS, COMPARISON_OPERATORS, Token, TokenType, tokenize
from .state import ProgramState
from .values import Boolean, Number, Text, Value, type_name

PRECEDENCE: dict[TokenType, int] = {
    TokenType.STAR: 2,
    TokenType.SLASH: 2,
    TokenType.PLUS: 1,
    TokenType.MINUS: 1,
    **{op: 0 for op in COMPARISON_OPERATORS},
}

BINARY_OPERATORS = ARITHMETIC_OPERATORS | COMPARISON_OPERATORS

OPERAND_TYPES = frozenset({TokenType.NUMBER, TokenType.STRING, TokenType.IDENTIFIER})


def _describe(token: Token | None) -> str:
    return "end of input" if token is None else repr(token.value)


class Evaluator:
    """
    Expression evaluator bound to a program state (for variable lookups).

    Usage:
        evaluator = Evaluator(state)
        value, consumed = evaluator.evaluate(tokens, start)
    """

    def __init__(self, state: ProgramState | None = None):
        self.state = state if state is not None else ProgramState()

    def evaluate(self, tokens: Sequence[Token], start: int = 0) -> tuple[Value, int]:
        """Evaluate the expression beginning at ``tokens[start]``.

        The expression runs until a token that cannot continue it.
        Returns the value and the number of tokens consumed.
        """
        postfix, end = self.to_postfix(tokens, start)
        return self.evaluate_postfix(postfix), end - start

    # ─────────────────────────────────────────────────────────
    #  Infix → Postfix
    # ─────────────────────────────────────────────────────────

    def to_postfix(self, tokens: Sequence[Token], start: int = 0) -> tuple[list[Token], int]:
        """Shunting-yard: convert the expression at ``start`` to postfix.

        Returns the postfix token list and the index just past the
        expression.
        """
        output: list[Token] = []
        operators: list[Token] = []
        depth = 0
        expect_operand = True
        pos = start

        while pos < len(tokens):
            token = tokens[pos]
            if expect_operand:
                if token.type in OPERAND_TYPES:
                    output.append(token)
                    expect_operand = False
                elif token.type == TokenType.LPAREN:
                    operators.append(token)
                    depth += 1
                else:
                    raise StikSyntaxError.at(
                        token, "expected an operand",
                        expected="number, string, variable or '('", found=_describe(token),
                    )
            elif token.type in BINARY_OPERATORS:
                self._push_operator(token, operators, output)
                expect_operand = True
            elif token.type == TokenType.NUMBER and token.value.startswith("-"):
                # "8 -2" lexes as 8, -2; read it as 8 - 2
                self._push_operator(Token(TokenType.MINUS, "-", token.line, token.col), operators, output)
                output.append(Token(TokenType.NUMBER, token.value[1:], token.line, token.col + 1))
            elif token.type == TokenType.RPAREN and depth > 0:
                while operators[-1].type != TokenType.LPAREN:
                    output.append(operators.pop())
                operators.pop()
                depth -= 1
            else:
                break
            pos += 1

        if depth > 0:
            opener = next(op for op in reversed(operators) if op.type == TokenType.LPAREN)
            raise StikSyntaxError.at(opener, "unmatched parenthesis")
        if expect_operand:
            found = tokens[pos] if pos < len(tokens) else None
            if pos == start:
                raise StikSyntaxError.at(found, "empty expression")
            raise StikSyntaxError.at(
                tokens[pos - 1], "expression ends with an operator",
                expected="operand", found=_describe(found),
            )

        while operators:
            output.append(operators.pop())
        return output, pos

    @staticmethod
    def _push_operator(token: Token, operators: list[Token], output: list[Token]):
        while (
            operators
            and operators[-1].type != TokenType.LPAREN
            and PRECEDENCE[operators[-1].type] >= PRECEDENCE[token.type]
        ):
            output.append(operators.pop())
        operators.append(token)

    # ─────────────────────────────────────────────────────────
    #  Postfix Evaluation
    # ─────────────────────────────────────────────────────────

    def evaluate_postfix(self, postfix: Sequence[Token]) -> Value:
        """Evaluate a postfix token sequence with a value stack."""
        stack: list[Value] = []
        for token in postfix:
            if token.type in BINARY_OPERATORS:
                if len(stack) < 2:
                    raise StikSyntaxError.at(token, f"operator '{token.value}' is missing an operand")
                right = stack.pop()
                left = stack.pop()
                stack.append(self.apply_operator(token, left, right))
            else:
                stack.append(self.evaluate_operand(token))

        if len(stack) != 1:
            first = postfix[0] if postfix else None
            raise StikSyntaxError.at(first, f"invalid expression ({len(stack)} values left on the stack)")
        return stack[0]

    def evaluate_operand(self, token: Token) -> Value:
        """Evaluate a single operand token."""
        match token.type:
            case TokenType.NUMBER:
                return Number(float(token.value))
            case TokenType.STRING:
                return Text(token.value)
            case TokenType.IDENTIFIER:
                return self.state.get_variable(token.value, line=token.line, col=token.col)
        raise StikSyntaxError.at(
            token, "unexpected token in expression",
            expected="number, string or variable", found=_describe(token),
        )

    # ─────────────────────────────────────────────────────────
    #  Operators
    # ─────────────────────────────────────────────────────────

    def apply_operator(self, op: Token, left: Value, right: Value) -> Value:
        """Apply a binary operator to two values of matching types."""
        match left, right:
            case Number(a), Number(b):
                return self._numeric(op, a, b)
            case Boolean(a), Boolean(b):
                if op.type == TokenType.EQ:
                    return Boolean(a == b)
                if op.type == TokenType.NEQ:
                    return Boolean(a != b)
                raise StikRuntimeError.at(
                    op, f"operator '{op.value}' is not defined for booleans",
                    expected="'==' or '!='", found=repr(op.value),
                )
        raise StikRuntimeError.at(
            op, f"invalid operand types for '{op.value}'",
            expected="number and number", found=f"{type_name(left)} and {type_name(right)}",
        )

    @staticmethod
    def _numeric(op: Token, a: float, b: float) -> Value:
        match op.type:
            case TokenType.PLUS:
                return Number(a + b)
            case TokenType.MINUS:
                return Number(a - b)
            case TokenType.STAR:
                return Number(a * b)
            case TokenType.SLASH:
                if b == 0:
                    raise DivisionByZero(line=op.line, col=op.col)
                return Number(a / b)
            case TokenType.EQ:
                return Boolean(a == b)
            case TokenType.NEQ:
                return Boolean(a != b)
            case TokenType.LT:
                return Boolean(a < b)
            case TokenType.GT:
                return Boolean(a > b)
            case TokenType.LTE:
                return Boolean(a <= b)
            case TokenType.GTE:
                return Boolean(a >= b)
        raise StikSyntaxError.at(op, f"unknown operator '{op.value}'")


def calculate(expression: str, state: ProgramState | None = None) -> Value:
    """Evaluate a whole single-line expression (calculator mode)."""
    tokens = tokenize(expression)
    value, consumed = Evaluator(state).evaluate(tokens)
    if consumed < len(tokens):
        leftover = tokens[consumed]
        if leftover.type == TokenType.RPAREN:
            raise StikSyntaxError.at(leftover, "unmatched parenthesis")
        raise StikSyntaxError.at(
            leftover, "unexpected token after expression",
            expected="operator or end of input", found=_describe(leftover),
        )
    return value
