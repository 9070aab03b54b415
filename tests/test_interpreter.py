import io

import pytest

from zeta import run_program
from zeta.ast import Assign, BinOp, Compound, Node, NoOp, Num, UnaryOp, Var
from zeta.errors import DivisionByZero, UndefinedVariable, UnknownOperator
from zeta.interpreter import Interpreter, format_number
from zeta.lexer import Lexer
from zeta.parser import Parser
from zeta.tokens import TokenType


def evaluate(source):
    return run_program(source, out=io.StringIO())


def parser_for(source):
    return Parser(Lexer.from_text(source))


@pytest.mark.parametrize('source, expected', [
    ('1 + 2 * 3', 7),
    ('(1 + 2) * 3', 9),
    ('10 - 4 - 3', 3),
    ('16 / 4 / 2', 2),
    ('2 * 3 + 4 * 5', 26),
    ('7 / 2', 3.5),
    ('-3 * -3', 9),
    ('--5', 5),
    ('-+-5', 5),
    ('+-+2', -2),
    ('1.5e3', 1500),
    ('2.5e-1 * 4', 1),
    ('.25 + .75', 1),
])
def test_arithmetic(source, expected):
    assert evaluate(source) == [expected]


def test_assignment_then_use(capsys):
    assert run_program('x = 5; x + 1') == [5, 6]
    assert capsys.readouterr().out == '5 6\n'


def test_one_output_line_per_source_line(capsys):
    run_program('a = 2\nb = a * a; b + 1\n\n;\na / 4')
    assert capsys.readouterr().out == '2\n4 5\n0.5\n'


def test_assignment_rebinds(capsys):
    run_program('n = 1; n = n + 1; n = n * 10')
    assert capsys.readouterr().out == '1 2 20\n'


def test_division_by_zero_is_an_error():
    with pytest.raises(DivisionByZero):
        evaluate('1/0')
    with pytest.raises(DivisionByZero):
        evaluate('z = 0; 5 / (z * 3)')


def test_division_by_negative_zero_is_an_error():
    with pytest.raises(DivisionByZero):
        evaluate('1 / -0')


def test_undefined_variable():
    with pytest.raises(UndefinedVariable) as excinfo:
        evaluate('y + 1')
    assert excinfo.value.name == 'y'


def test_left_operand_is_evaluated_first():
    # The left operand fails first, so its name is the one reported
    with pytest.raises(UndefinedVariable) as excinfo:
        evaluate('a + b')
    assert excinfo.value.name == 'a'


def test_error_stops_later_statements():
    out = io.StringIO()
    interpreter = Interpreter(out=out)
    with pytest.raises(DivisionByZero):
        interpreter.run(parser_for('a = 1; a / 0; b = 2\nc = 3'))
    assert 'b' not in interpreter.global_env
    assert 'c' not in interpreter.global_env
    assert out.getvalue() == '1'


def test_fresh_interpreters_do_not_share_state():
    first = evaluate('x = 3; x * x\nx + 1')
    second = evaluate('x = 3; x * x\nx + 1')
    assert first == second == [3, 9, 4]
    with pytest.raises(UndefinedVariable):
        evaluate('x')


def test_environment_persists_across_runs_of_one_interpreter():
    out = io.StringIO()
    interpreter = Interpreter(out=out)
    interpreter.run(parser_for('x = 4'))
    assert interpreter.run(parser_for('x * 2')) == [8]
    assert out.getvalue() == '4\n8\n'


def test_run_requires_a_parser():
    with pytest.raises(ValueError):
        Interpreter().run()


def test_execute_prebuilt_trees():
    out = io.StringIO()
    interpreter = Interpreter(out=out)
    program = [
        Compound([Assign(Var('r'), TokenType.ASSIGN, Num(2.0)), NoOp()]),
        Compound([BinOp(TokenType.MUL, Var('r'), UnaryOp(TokenType.MINUS, Num(3.0)))]),
    ]
    assert interpreter.execute_program(program) == [2, -6]
    assert out.getvalue() == '2\n-6\n'


def test_malformed_trees_raise_unknown_operator():
    interpreter = Interpreter(out=io.StringIO())
    with pytest.raises(UnknownOperator):
        interpreter.evaluate(BinOp(TokenType.ASSIGN, Num(1.0), Num(2.0)))
    with pytest.raises(UnknownOperator):
        interpreter.evaluate(UnaryOp(TokenType.MUL, Num(1.0)))


def test_unknown_node_type_raises_unknown_operator():
    interpreter = Interpreter(out=io.StringIO())
    with pytest.raises(UnknownOperator) as excinfo:
        interpreter.evaluate(Node())
    assert excinfo.value.op == 'Node'
    with pytest.raises(UnknownOperator):
        interpreter.execute_program([Compound([BinOp(TokenType.PLUS, Num(1.0), Node())])])


def test_emitted_holds_only_the_latest_run():
    interpreter = Interpreter(out=io.StringIO())
    interpreter.run(parser_for('a = 1; a + 1'))
    interpreter.run(parser_for('a * 10'))
    assert interpreter.emitted == [10]
    interpreter.execute_program([Compound([Num(7.0)])])
    assert interpreter.emitted == [7]


@pytest.mark.parametrize('value, text', [
    (7.0, '7'),
    (2.5, '2.5'),
    (1500.0, '1500'),
    (1.0 / 3.0, '0.333333'),
    (1e20, '1e+20'),
    (-0.5, '-0.5'),
])
def test_format_number_matches_printf_g(value, text):
    assert format_number(value) == text


def test_debug_file_traces_evaluation(tmp_path):
    debug_file = tmp_path / 'debug.txt'
    with Interpreter(debug_level=2, debug_file=str(debug_file), out=io.StringIO()) as interpreter:
        interpreter.run(interpreter.make_parser(Lexer.from_text('k = 2; k * 3')))
    trace = debug_file.read_text().splitlines()
    assert 'assign k = 2' in trace
    assert 'emit 6' in trace
    assert not any(line.startswith('visit') for line in trace)
