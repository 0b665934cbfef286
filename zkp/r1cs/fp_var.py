"""
R1CS 필드 원소 가젯 (FpVar)
============================

FR 값을 갖는 회로 변수. 내부적으로는 선형결합이므로 덧셈/뺄셈/상수배는
제약 없이 계산되고, 두 비상수 값의 곱만 제약 1개를 추가한다.

**선택/룩업 비용** (비트가 하나라도 변수일 때):
  | 연산                        | 제약 수 | 제약                                        |
  |-----------------------------|---------|---------------------------------------------|
  | conditionally_select        | 1       | cond·(t − f) = r − f                        |
  | conditionally_select (상수) | 0       | r = f + cond·(t − f)  (선형)                |
  | two_bit_lookup              | 1       | (b₁·(c₃−c₂−c₁+c₀) + (c₁−c₀))·b₀             |
  |                             |         |   = r − c₀ − b₁·(c₂−c₀)                     |
  | three_bit_cond_neg_lookup   | 1       | (2y)·b₂ = y − r                             |

  three_bit_cond_neg_lookup 의 y 는 b0b1 = b₀·b₁ 이 주어지면 선형이다:
    y = c₀ + b₀(c₁−c₀) + b₁(c₂−c₀) + b₀b₁(c₃−c₂−c₁+c₀)

사용 예시:
    >>> cs = ConstraintSystem()
    >>> x = FpVar.new_witness(cs, lambda: 3)
    >>> (x * x + 1).value()   # FR(10)
"""

from zkp.r1cs.constraint_system import AssignmentMissing, Unsatisfiable
from zkp.r1cs.field import FR, to_fr
from zkp.r1cs.linear_combination import LinearCombination
from zkp.r1cs.select import (
    CondSelectGadget,
    TwoBitLookupGadget,
    ThreeBitCondNegLookupGadget,
    check_two_bit_lookup_args,
    check_three_bit_lookup_args,
)


def _first_cs(*items):
    for item in items:
        if item.cs is not None:
            return item.cs
    return None


class FpVar(CondSelectGadget, TwoBitLookupGadget, ThreeBitCondNegLookupGadget):
    """FR 값을 갖는 회로 변수.

    속성:
        cs: 소속 ConstraintSystem (상수이면 None)
    """

    def __init__(self, lc, value=None, cs=None):
        self._lc = lc
        self._value = value
        self.cs = cs

    # ─── 생성 ───

    @classmethod
    def constant(cls, value):
        """상수 FpVar. 제약 시스템 없이 존재한다."""
        value = to_fr(value)
        return cls(LinearCombination.constant(value), value, None)

    @classmethod
    def _make(cls, lc, value, cs):
        if lc.is_constant():
            return cls.constant(lc.constant_term())
        return cls(lc, value, cs)

    @classmethod
    def new_witness(cls, cs, f):
        """비공개 witness 를 할당한다. f 는 int 또는 FR 을 반환하는 callable."""
        value = None if cs.setup_mode else to_fr(f())
        var = cs.new_witness_variable(lambda: value)
        return cls(LinearCombination.from_variable(var), value, cs)

    @classmethod
    def new_input(cls, cs, f):
        """공개 입력을 할당한다."""
        value = None if cs.setup_mode else to_fr(f())
        var = cs.new_input_variable(lambda: value)
        return cls(LinearCombination.from_variable(var), value, cs)

    @classmethod
    def from_boolean(cls, b):
        """Boolean 을 0/1 FpVar 로 본다. 제약 없음."""
        value = None
        if b.has_value():
            value = FR(1) if b.value() else FR(0)
        return cls._make(b.lc(), value, b.cs)

    @classmethod
    def _coerce(cls, other):
        if isinstance(other, FpVar):
            return other
        return cls.constant(other)

    # ─── 조회 ───

    def lc(self):
        return self._lc

    def is_constant(self):
        return self.cs is None

    def has_value(self):
        return self._value is not None

    def value(self):
        """할당된 FR 값.

        Raises:
            AssignmentMissing: setup 모드라 값이 없을 때
        """
        if self._value is None:
            raise AssignmentMissing("FpVar 에 할당된 값이 없습니다")
        return self._value

    def __repr__(self):
        if self.is_constant():
            return f"FpVar.constant({int(self._value)})"
        value = None if self._value is None else int(self._value)
        return f"FpVar({self._lc}, value={value})"

    # ─── 산술 ───

    def _linear(self, other, lc, op):
        value = None
        if self.has_value() and other.has_value():
            value = op(self._value, other._value)
        return FpVar._make(lc, value, _first_cs(self, other))

    def __add__(self, other):
        other = FpVar._coerce(other)
        return self._linear(other, self._lc + other._lc, lambda a, b: a + b)

    __radd__ = __add__

    def __sub__(self, other):
        other = FpVar._coerce(other)
        return self._linear(other, self._lc - other._lc, lambda a, b: a - b)

    def __rsub__(self, other):
        return FpVar._coerce(other) - self

    def __neg__(self):
        value = None if self._value is None else -self._value
        return FpVar._make(-self._lc, value, self.cs)

    def __mul__(self, other):
        other = FpVar._coerce(other)
        if other.is_constant():
            return self._linear(other, self._lc * other.value(), lambda a, b: a * b)
        if self.is_constant():
            return other._linear(self, other._lc * self.value(), lambda a, b: a * b)

        cs = self.cs
        value = None
        if self.has_value() and other.has_value():
            value = self._value * other._value
        var = cs.new_witness_variable(lambda: value)
        result = FpVar(LinearCombination.from_variable(var), value, cs)
        cs.enforce_constraint(self._lc, other._lc, result._lc)
        return result

    __rmul__ = __mul__

    def enforce_equal(self, other):
        """self == other 를 강제한다: (self − other) · 1 = 0."""
        other = FpVar._coerce(other)
        if self.is_constant() and other.is_constant():
            if self.value() != other.value():
                raise Unsatisfiable("서로 다른 상수는 같을 수 없습니다")
            return
        cs = _first_cs(self, other)
        cs.enforce_constraint(
            self._lc - other._lc,
            LinearCombination.constant(1),
            LinearCombination.zero(),
        )

    # ─── 선택 ───

    @classmethod
    def conditionally_select(cls, cond, true_value, false_value):
        """cond ? true_value : false_value."""
        if cond.is_constant():
            return true_value if cond.value() else false_value

        cs = cond.cs
        value = None
        if cond.has_value() and true_value.has_value() and false_value.has_value():
            value = true_value._value if cond.value() else false_value._value

        if true_value.is_constant() and false_value.is_constant():
            # f + cond·(t − f), 선형
            diff = true_value.value() - false_value.value()
            return cls._make(false_value._lc + cond.lc() * diff, value, cs)

        var = cs.new_witness_variable(lambda: value)
        result = cls(LinearCombination.from_variable(var), value, cs)
        cs.enforce_constraint(
            cond.lc(),
            true_value._lc - false_value._lc,
            result._lc - false_value._lc,
        )
        return result

    @classmethod
    def weighted_sum(cls, conditions, values):
        """Σ conditions[i] · values[i]. 비상수 값마다 제약 1개."""
        total = cls.constant(0)
        for cond, value in zip(conditions, values):
            total = total + cls.from_boolean(cond) * value
        return total

    # ─── 룩업 ───

    @classmethod
    def two_bit_lookup(cls, bits, constants):
        """b = bits[0] + 2·bits[1] 일 때 constants[b]. 비트가 변수이면 제약 1개."""
        check_two_bit_lookup_args(bits, constants)
        c = [to_fr(x) for x in constants]
        b0, b1 = bits

        if b0.is_constant() and b1.is_constant():
            return cls.constant(c[int(b0.value()) + 2 * int(b1.value())])

        cs = _first_cs(b0, b1)
        value = None
        if b0.has_value() and b1.has_value():
            value = c[int(b0.value()) + 2 * int(b1.value())]
        var = cs.new_witness_variable(lambda: value)
        result = cls(LinearCombination.from_variable(var), value, cs)

        one = LinearCombination.constant(1)
        cs.enforce_constraint(
            b1.lc() * (c[3] - c[2] - c[1] + c[0]) + one * (c[1] - c[0]),
            b0.lc(),
            result._lc - one * c[0] - b1.lc() * (c[2] - c[0]),
        )
        return result

    @classmethod
    def three_bit_cond_neg_lookup(cls, bits, b0b1, constants):
        """constants[bits[0] + 2·bits[1]] · (−1 if bits[2] else 1). 제약 1개."""
        check_three_bit_lookup_args(bits, constants)
        c = [to_fr(x) for x in constants]
        b0, b1, b2 = bits

        one = LinearCombination.constant(1)
        y_lc = (
            b0b1.lc() * (c[3] - c[2] - c[1] + c[0])
            + b0.lc() * (c[1] - c[0])
            + b1.lc() * (c[2] - c[0])
            + one * c[0]
        )

        if b0.is_constant() and b1.is_constant() and b2.is_constant():
            y = c[int(b0.value()) + 2 * int(b1.value())]
            return cls.constant(-y if b2.value() else y)

        cs = _first_cs(b0, b1, b2, b0b1)
        value = None
        if b0.has_value() and b1.has_value() and b2.has_value():
            y = c[int(b0.value()) + 2 * int(b1.value())]
            value = -y if b2.value() else y
        var = cs.new_witness_variable(lambda: value)
        result = cls(LinearCombination.from_variable(var), value, cs)

        # y · (1 − 2·b₂) = r  ⇔  (2y) · b₂ = y − r
        cs.enforce_constraint(y_lc + y_lc, b2.lc(), y_lc - result._lc)
        return result
