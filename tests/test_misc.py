"""Tests for the FX instruction group: timers, fonts, BCD, register transfers."""

import jax.numpy as jnp
import pytest
from chipjax import (
    execute, step, tick_timers, load_program, create_state, make_config, Mode, Quirks,
    ControlState, UnknownOpcode, OutOfBoundsAccess, FONT_START, BIG_FONT_START,
)
from chipjax.keypad import key_down, key_up, is_pressed, first_pressed
from chipjax.timers import is_sound_active
from chipjax.errors import InvalidKey
from conftest import program


class TestTimers:
    """FX07, FX15, FX18 and the 60 Hz tick."""

    def test_set_and_get_delay_timer(self, fresh_state):
        state = execute(fresh_state, 0x6530)  # V5 = 0x30
        state = execute(state, 0xF515)  # DT = V5
        state = execute(state, 0xF207)  # V2 = DT

        assert state.delay_timer == 0x30
        assert state.V[2] == 0x30

    def test_tick_decrements_both_timers(self, fresh_state):
        state = execute(fresh_state, 0x6003)
        state = execute(state, 0xF015)
        state = execute(state, 0xF018)

        state = tick_timers(state)

        assert state.delay_timer == 2
        assert state.sound_timer == 2

    def test_tick_clamps_at_zero(self, fresh_state):
        state = execute(fresh_state, 0x6001)
        state = execute(state, 0xF018)

        for _ in range(3):
            state = tick_timers(state)

        assert state.sound_timer == 0
        assert state.delay_timer == 0

    def test_sound_active_while_timer_nonzero(self, fresh_state):
        assert not is_sound_active(fresh_state)

        state = execute(fresh_state, 0x6002)
        state = execute(state, 0xF018)
        assert is_sound_active(state)

        state = tick_timers(state)
        assert is_sound_active(state)
        state = tick_timers(state)
        assert not is_sound_active(state)

    def test_instructions_do_not_tick_timers(self, fresh_state):
        state = execute(fresh_state, 0x600A)
        state = execute(state, 0xF015)
        for _ in range(10):
            state = execute(state, 0x7101)
        assert state.delay_timer == 10


class TestIndexArithmetic:
    """FX1E."""

    def test_add_to_index(self, fresh_state):
        state = execute(fresh_state, 0xA100)
        state = execute(state, 0x6320)
        state = execute(state, 0xF31E)
        assert state.I == 0x120

    def test_add_to_index_leaves_flag(self, fresh_state):
        state = execute(fresh_state, 0xAFFF)
        state = execute(state, 0x6F00)
        state = execute(state, 0x6101)
        state = execute(state, 0xF11E)

        assert state.I == 0x1000
        assert state.V[15] == 0


class TestFonts:
    """FX29 and FX30."""

    @pytest.mark.parametrize("digit", [0x0, 0x7, 0xF])
    def test_font_character(self, fresh_state, digit):
        state = execute(fresh_state, 0x6400 | digit)
        state = execute(state, 0xF429)
        assert state.I == FONT_START + digit * 5

    def test_font_character_uses_low_nibble(self, fresh_state):
        state = execute(fresh_state, 0x64A3)
        state = execute(state, 0xF429)
        assert state.I == FONT_START + 3 * 5

    def test_big_font_character(self, extended_state):
        state = execute(extended_state, 0x6407)
        state = execute(state, 0xF430)
        assert state.I == BIG_FONT_START + 7 * 10

    def test_big_font_wraps_to_decimal_digit(self, extended_state):
        state = execute(extended_state, 0x640C)  # 12 -> digit 2
        state = execute(state, 0xF430)
        assert state.I == BIG_FONT_START + 2 * 10


class TestBCD:
    """FX33."""

    @pytest.mark.parametrize("value,digits", [
        (0, [0, 0, 0]),
        (9, [0, 0, 9]),
        (42, [0, 4, 2]),
        (156, [1, 5, 6]),
        (255, [2, 5, 5]),
    ])
    def test_bcd(self, fresh_state, value, digits):
        state = execute(fresh_state, 0x6000 | value)
        state = execute(state, 0xA300)
        state = execute(state, 0xF033)

        assert [int(b) for b in state.memory[0x300:0x303]] == digits
        assert state.I == 0x300


class TestRegisterTransfer:
    """FX55 / FX65 under both index quirks."""

    def _with_registers(self, state, values):
        return state.replace(V=state.V.at[:len(values)].set(jnp.array(values, dtype=jnp.uint8)))

    def test_store_registers_increments_index(self, base_state):
        state = self._with_registers(base_state, [1, 2, 3, 4])
        state = execute(state, 0xA400)
        state = execute(state, 0xF355)

        assert [int(b) for b in state.memory[0x400:0x405]] == [1, 2, 3, 4, 0]
        assert state.I == 0x404

    def test_store_registers_keeps_index(self, extended_state):
        state = self._with_registers(extended_state, [1, 2, 3, 4])
        state = execute(state, 0xA400)
        state = execute(state, 0xF355)

        assert [int(b) for b in state.memory[0x400:0x404]] == [1, 2, 3, 4]
        assert state.I == 0x400

    def test_load_registers(self, base_state):
        state = base_state.replace(
            memory=base_state.memory.at[0x500:0x503].set(jnp.array([9, 8, 7], dtype=jnp.uint8))
        )
        state = execute(state, 0x6355)  # V3 must survive
        state = execute(state, 0xA500)
        state = execute(state, 0xF265)

        assert [int(v) for v in state.V[:4]] == [9, 8, 7, 0x55]
        assert state.I == 0x503

    def test_load_registers_keeps_index(self, extended_state):
        state = execute(extended_state, 0xA050)
        state = execute(state, 0xF065)
        assert state.V[0] == 0xF0
        assert state.I == 0x050

    def test_store_past_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0xAFFC)
        with pytest.raises(OutOfBoundsAccess):
            execute(state, 0xFF55)

    def test_quirk_override(self):
        quirks = Quirks(increment_index=False)
        state = create_state(config=make_config(Mode.BASE, quirks))
        state = execute(state, 0xA300)
        state = execute(state, 0xF155)
        assert state.I == 0x300


class TestFlagStore:
    """FX75 / FX85 RPL user flags."""

    def test_store_and_load_flags(self, extended_state):
        state = extended_state.replace(
            V=extended_state.V.at[:4].set(jnp.array([5, 6, 7, 8], dtype=jnp.uint8))
        )
        state = execute(state, 0xF375)
        state = state.replace(V=jnp.zeros_like(state.V))

        state = execute(state, 0xF285)

        assert [int(v) for v in state.V[:4]] == [5, 6, 7, 0]
        assert [int(f) for f in state.rpl[:4]] == [5, 6, 7, 8]

    def test_flags_do_not_touch_memory(self, extended_state):
        state = execute(extended_state, 0x60FF)
        state = execute(state, 0xF075)
        assert jnp.array_equal(state.memory, extended_state.memory)

    def test_flags_limited_to_eight_registers(self, extended_state):
        with pytest.raises(UnknownOpcode):
            execute(extended_state, 0xF875)
        with pytest.raises(UnknownOpcode):
            execute(extended_state, 0xFF85)


class TestWaitForKey:
    """FX0A and the keypad."""

    def test_wait_blocks_until_key(self, fresh_state):
        state = load_program(fresh_state, program(0xF30A, 0x6101))

        state, instruction = step(state)
        assert state.control is ControlState.WAITING_FOR_KEY
        assert state.pc == 0x202

        for _ in range(3):
            state, instruction = step(state)
            assert instruction is None
            assert state.pc == 0x202

        state = key_down(state, 0x9)
        state, instruction = step(state)

        assert state.control is ControlState.RUNNING
        assert state.V[3] == 0x9
        assert state.V[1] == 1  # next instruction ran in the same step

    def test_wait_takes_lowest_pressed_key(self, fresh_state):
        state = load_program(fresh_state, program(0xF20A, 0x1202))
        state, _ = step(state)

        state = key_down(key_down(state, 0xC), 0x4)
        state, _ = step(state)

        assert state.V[2] == 0x4

    def test_timers_run_while_waiting(self, fresh_state):
        state = execute(fresh_state, 0x6005)
        state = execute(state, 0xF015)
        state = execute(state, 0xF00A)

        state = tick_timers(tick_timers(state))

        assert state.delay_timer == 3
        assert state.waiting_for_key

    def test_keypad_helpers(self, fresh_state):
        assert first_pressed(fresh_state) is None

        state = key_down(fresh_state, 0xF)
        assert is_pressed(state, 0xF)
        assert first_pressed(state) == 0xF

        state = key_up(state, 0xF)
        assert not is_pressed(state, 0xF)

    @pytest.mark.parametrize("key", [16, -1])
    def test_invalid_key(self, fresh_state, key):
        with pytest.raises(InvalidKey):
            key_down(fresh_state, key)
        with pytest.raises(ValueError):
            is_pressed(fresh_state, key)
