"""Tests for the 8XYN register arithmetic and logic group."""

import pytest
from chipjax import execute, create_state, make_config, Mode, Quirks, UnknownOpcode
from conftest import set_registers


# (instruction, V1, V2, expected V1, expected VF); VF starts at 0x07
ARITHMETIC_CASES = [
    (0x8120, 0x42, 0x99, 0x99, 0x07),  # LD leaves VF
    (0x8124, 0x10, 0x20, 0x30, 0),
    (0x8124, 0xFF, 0x01, 0x00, 1),
    (0x8124, 0xC8, 0x64, 44, 1),  # 300 mod 256
    (0x8125, 0x30, 0x10, 0x20, 1),
    (0x8125, 0x10, 0x30, 0xE0, 0),
    (0x8125, 0x42, 0x42, 0x00, 1),  # equal operands do not borrow
    (0x8127, 0x10, 0x30, 0x20, 1),
    (0x8127, 0x30, 0x10, 0xE0, 0),
]


class TestArithmetic:
    """LD, ADD, SUB and SUBN with their carry/borrow flags."""

    @pytest.mark.parametrize("instruction,v1,v2,result,flag", ARITHMETIC_CASES)
    def test_operation(self, fresh_state, instruction, v1, v2, result, flag):
        state = set_registers(fresh_state, V1=v1, V2=v2, VF=0x07)

        state = execute(state, instruction)

        assert state.V[1] == result
        assert state.V[2] == v2
        assert state.V[15] == flag

    def test_doubling_a_register(self, fresh_state):
        state = set_registers(fresh_state, V5=0x80)
        state = execute(state, 0x8554)
        assert state.V[5] == 0
        assert state.V[15] == 1

    def test_flag_register_as_source(self, fresh_state):
        state = set_registers(fresh_state, V1=0x10, VF=0x42)
        state = execute(state, 0x81F4)
        assert state.V[1] == 0x52
        assert state.V[15] == 0


class TestLogic:
    """OR, AND, XOR and the flag-reset quirk."""

    @pytest.mark.parametrize("instruction,expected", [
        (0x8121, 0xF5),
        (0x8122, 0xA0),
        (0x8123, 0x55),
    ])
    def test_results(self, fresh_state, instruction, expected):
        state = set_registers(fresh_state, V1=0xF0, V2=0xA5)
        assert execute(state, instruction).V[1] == expected

    def test_xor_with_itself_is_zero(self, fresh_state):
        state = set_registers(fresh_state, V3=0xAA)
        assert execute(state, 0x8333).V[3] == 0

    @pytest.mark.parametrize("instruction", [0x8121, 0x8122, 0x8123])
    def test_base_mode_resets_flag(self, base_state, instruction):
        state = execute(set_registers(base_state, VF=0x05), instruction)
        assert state.V[15] == 0

    @pytest.mark.parametrize("instruction", [0x8121, 0x8122, 0x8123])
    def test_extended_mode_preserves_flag(self, extended_state, instruction):
        state = execute(set_registers(extended_state, VF=0x05), instruction)
        assert state.V[15] == 0x05


class TestShifts:
    """SHR / SHL, shifting VY (CHIP-8) or VX in place (SUPER-CHIP)."""

    @pytest.mark.parametrize("instruction,vx,vy,result,flag", [
        (0x8126, 0x04, 0xFF, 0x02, 0),
        (0x8126, 0x05, 0xFF, 0x02, 1),
        (0x812E, 0x81, 0xFF, 0x02, 1),
        (0x812E, 0x41, 0xFF, 0x82, 0),
    ])
    def test_in_place(self, extended_state, instruction, vx, vy, result, flag):
        state = execute(set_registers(extended_state, V1=vx, V2=vy), instruction)
        assert state.V[1] == result
        assert state.V[15] == flag

    @pytest.mark.parametrize("instruction,vx,vy,result,flag", [
        (0x8126, 0x08, 0x03, 0x01, 1),
        (0x812E, 0x81, 0x41, 0x82, 0),
        (0x812E, 0x00, 0x80, 0x00, 1),
    ])
    def test_from_vy(self, base_state, instruction, vx, vy, result, flag):
        state = execute(set_registers(base_state, V1=vx, V2=vy), instruction)
        assert state.V[1] == result
        assert state.V[2] == vy
        assert state.V[15] == flag

    def test_quirk_override(self):
        quirks = Quirks(shift_uses_vy=False)
        state = create_state(config=make_config(Mode.BASE, quirks=quirks))

        state = execute(set_registers(state, V1=0x08, V2=0x03), 0x8126)

        assert state.V[1] == 0x04


class TestFlagDestination:
    """With X = F the flag overwrites the result."""

    @pytest.mark.parametrize("instruction,vf,v1,expected", [
        (0x8F14, 0xFF, 0x02, 1),
        (0x8F14, 0x10, 0x02, 0),
        (0x8F15, 0x10, 0x20, 0),
        (0x8F15, 0x20, 0x10, 1),
    ])
    def test_flag_wins(self, fresh_state, instruction, vf, v1, expected):
        state = execute(set_registers(fresh_state, VF=vf, V1=v1), instruction)
        assert state.V[15] == expected

    def test_shift_into_flag(self, extended_state):
        state = execute(set_registers(extended_state, VF=0x81), 0x8F0E)
        assert state.V[15] == 1


class TestUndefined:
    """8XY8-8XYD and 8XYF are not instructions."""

    @pytest.mark.parametrize("n", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_raises(self, fresh_state, n):
        with pytest.raises(UnknownOpcode) as excinfo:
            execute(fresh_state, 0x8120 | n)
        assert excinfo.value.opcode == 0x8120 | n

    def test_skipped_by_policy(self, skipping_state):
        state = execute(set_registers(skipping_state, V1=0x42), 0x8128)
        assert state.V[1] == 0x42
        assert state.V[15] == 0
