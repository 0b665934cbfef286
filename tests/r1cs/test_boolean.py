"""
Boolean 배선 테스트.

테스트 대상:
  - constant / new_witness / new_input, 불리언 제약
  - not_, and_ (진리표, 제약 수)
  - conditionally_select, select
  - le_bits / be_bits 비트 순서
  - setup 모드
"""

import pytest
from zkp.r1cs.field import FR
from zkp.r1cs.constraint_system import AssignmentMissing, Unsatisfiable
from zkp.r1cs.boolean import Boolean, TRUE, FALSE
from zkp.r1cs.fp_var import FpVar


# ─────────────────────────────────────────────────────────────────────
# 생성
# ─────────────────────────────────────────────────────────────────────

class TestAllocation:

    def test_constants(self):
        assert TRUE.value() is True
        assert FALSE.value() is False
        assert TRUE.is_constant()
        assert TRUE.lc().constant_term() == FR(1)
        assert FALSE.lc().constant_term() == FR(0)

    def test_new_witness_enforces_booleanity(self, cs):
        b = Boolean.new_witness(cs, lambda: True)
        assert b.value() is True
        assert not b.is_constant()
        assert cs.num_constraints == 1
        assert cs.is_satisfied()

    def test_new_input(self, cs):
        b = Boolean.new_input(cs, lambda: False)
        assert b.value() is False
        assert cs.num_instance_variables == 2
        assert cs.is_satisfied()

    def test_non_boolean_witness_unsatisfied(self, cs):
        Boolean.new_witness(cs, lambda: True)
        cs.witness_values[0] = FR(2)
        assert not cs.is_satisfied()

    def test_value_callable_called_once(self, cs):
        calls = []

        def f():
            calls.append(1)
            return True

        Boolean.new_witness(cs, f)
        assert len(calls) == 1


# ─────────────────────────────────────────────────────────────────────
# 논리 연산
# ─────────────────────────────────────────────────────────────────────

class TestLogic:

    @pytest.mark.parametrize("a", [False, True])
    def test_not(self, cs, a):
        b = Boolean.new_witness(cs, lambda: a)
        before = cs.num_constraints
        n = b.not_()
        assert n.value() is (not a)
        assert cs.num_constraints == before

    @pytest.mark.parametrize("a,b", [(False, False), (False, True), (True, False), (True, True)])
    def test_and_truth_table(self, cs, a, b):
        x = Boolean.new_witness(cs, lambda: a)
        y = Boolean.new_witness(cs, lambda: b)
        before = cs.num_constraints
        z = x.and_(y)
        assert z.value() is (a and b)
        assert cs.num_constraints == before + 1
        assert cs.is_satisfied()

    def test_and_with_constant_is_free(self, cs):
        x = Boolean.new_witness(cs, lambda: True)
        before = cs.num_constraints
        assert x.and_(TRUE) is x
        assert x.and_(FALSE).value() is False
        assert TRUE.and_(x) is x
        assert cs.num_constraints == before

    def test_enforce_equal(self, cs):
        x = Boolean.new_witness(cs, lambda: True)
        x.enforce_equal(TRUE)
        assert cs.is_satisfied()
        x.enforce_equal(FALSE)
        assert not cs.is_satisfied()

    def test_enforce_equal_constants(self):
        TRUE.enforce_equal(TRUE)
        with pytest.raises(Unsatisfiable):
            TRUE.enforce_equal(FALSE)


# ─────────────────────────────────────────────────────────────────────
# 선택
# ─────────────────────────────────────────────────────────────────────

class TestSelect:

    @pytest.mark.parametrize("c", [False, True])
    @pytest.mark.parametrize("t,f", [(False, False), (False, True), (True, False), (True, True)])
    def test_conditionally_select_witnesses(self, cs, c, t, f):
        cond = Boolean.new_witness(cs, lambda: c)
        tv = Boolean.new_witness(cs, lambda: t)
        fv = Boolean.new_witness(cs, lambda: f)
        before = cs.num_constraints
        r = Boolean.conditionally_select(cond, tv, fv)
        assert r.value() is (t if c else f)
        assert cs.num_constraints == before + 1
        assert cs.is_satisfied()

    def test_constant_cond_returns_input(self, cs):
        tv = Boolean.new_witness(cs, lambda: True)
        fv = Boolean.new_witness(cs, lambda: False)
        assert Boolean.conditionally_select(TRUE, tv, fv) is tv
        assert Boolean.conditionally_select(FALSE, tv, fv) is fv

    def test_constant_candidates(self, cs):
        cond = Boolean.new_witness(cs, lambda: False)
        before = cs.num_constraints
        assert Boolean.conditionally_select(cond, TRUE, FALSE).value() is False
        assert Boolean.conditionally_select(cond, FALSE, TRUE).value() is True
        assert cs.num_constraints == before

    def test_select_sugar_dispatches_on_value_type(self, cs):
        cond = Boolean.new_witness(cs, lambda: True)
        r = cond.select(FpVar.constant(10), FpVar.constant(20))
        assert isinstance(r, FpVar)
        assert r.value() == FR(10)

    @pytest.mark.parametrize("hot", range(3))
    def test_weighted_sum(self, cs, hot):
        conds = [Boolean.new_witness(cs, lambda i=i: i == hot) for i in range(3)]
        values = [Boolean.new_witness(cs, lambda v=v: v) for v in (True, False, True)]
        before = cs.num_constraints
        r = Boolean.weighted_sum(conds, values)
        assert r.value() is (hot != 1)
        assert cs.num_constraints == before + 3
        assert cs.is_satisfied()

    def test_weighted_sum_constant_values(self, cs):
        conds = [Boolean.new_witness(cs, lambda i=i: i == 0) for i in range(2)]
        before = cs.num_constraints
        r = Boolean.weighted_sum(conds, [TRUE, FALSE])
        assert r.value() is True
        assert cs.num_constraints == before


# ─────────────────────────────────────────────────────────────────────
# 비트 변환 / setup 모드
# ─────────────────────────────────────────────────────────────────────

class TestBits:

    def test_le_bits(self):
        assert [b.value() for b in Boolean.le_bits(6, 3)] == [False, True, True]

    def test_be_bits(self):
        assert [b.value() for b in Boolean.be_bits(6, 3)] == [True, True, False]


class TestSetupMode:

    def test_value_missing(self, setup_cs):
        b = Boolean.new_witness(setup_cs, lambda: True)
        assert not b.has_value()
        with pytest.raises(AssignmentMissing):
            b.value()

    def test_same_constraint_count(self, cs, setup_cs):
        for system in (cs, setup_cs):
            x = Boolean.new_witness(system, lambda: True)
            y = Boolean.new_witness(system, lambda: False)
            x.and_(y)
            Boolean.conditionally_select(x, y, x.not_())
        assert cs.num_constraints == setup_cs.num_constraints
