from pathlib import Path

import pytest

from zeta.errors import DivisionByZero
from zeta.interpreter import Interpreter
from zeta.lexer import Lexer


def test_program_6_division_by_zero_stops_run(capsys):
    with open(Path(__file__).parent.parent / 'examples' / 'program_6.zeta', 'r', encoding='utf-8') as f:
        interp = Interpreter()
        with pytest.raises(DivisionByZero):
            interp.run(interp.make_parser(Lexer(f)))
    out = capsys.readouterr().out.strip()
    # Lines before the failing one were already printed
    assert out == '3\n4\n12'
    assert interp.global_env.get('area') == 12
