"""
R1CS 불리언 배선 (Boolean Wire)
================================

값이 0 또는 1임이 제약으로 보장된 회로 변수.

**불리언 제약**:
  새 witness b 를 할당할 때  b · (1 − b) = 0  을 추가한다 (제약 1개).

**표현**:
  Boolean 은 (선형결합, 값, 제약 시스템) 세 쌍이다.
  - 상수: 선형결합이 상수 0 또는 1, 제약 시스템 없음
  - 변수: 선형결합이 b 또는 1 − b (not_ 결과)

**연산 비용**:
  | 연산                  | 제약 수 |
  |-----------------------|---------|
  | not_                  | 0       |
  | and_ (둘 다 변수)     | 1       |
  | conditionally_select  | 1       |

사용 예시:
    >>> cs = ConstraintSystem()
    >>> b = Boolean.new_witness(cs, lambda: True)
    >>> b.not_().value()   # False
    >>> b.select(FpVar.constant(1), FpVar.constant(2)).value()   # FR(1)
"""

from zkp.r1cs.constraint_system import AssignmentMissing, Unsatisfiable
from zkp.r1cs.field import FR
from zkp.r1cs.linear_combination import LinearCombination
from zkp.r1cs.select import CondSelectGadget


class Boolean(CondSelectGadget):
    """0/1 로 제약된 회로 값."""

    def __init__(self, lc, value=None, cs=None):
        self._lc = lc
        self._value = value
        self.cs = cs

    # ─── 생성 ───

    @classmethod
    def constant(cls, value):
        """상수 불리언. 제약을 추가하지 않는다."""
        value = bool(value)
        return cls(LinearCombination.constant(1 if value else 0), value, None)

    @classmethod
    def from_lc(cls, lc, value, cs):
        """이미 0/1 임이 보장된 선형결합으로 Boolean 을 만든다.

        호출자는 lc 가 모든 만족 할당에서 0 또는 1 임을 보장해야 한다.
        """
        if lc.is_constant():
            return cls.constant(lc.constant_term() == FR(1))
        return cls(lc, value, cs)

    @classmethod
    def _allocate(cls, cs, new_variable, f):
        value = None if cs.setup_mode else bool(f())
        var = new_variable(lambda: 1 if value else 0)
        b = cls(LinearCombination.from_variable(var), value, cs)
        # b · (1 − b) = 0
        cs.enforce_constraint(b.lc(), LinearCombination.constant(1) - b.lc(), LinearCombination.zero())
        return b

    @classmethod
    def new_witness(cls, cs, f):
        """비공개 불리언을 할당한다. f 는 bool 을 반환하는 callable."""
        return cls._allocate(cs, cs.new_witness_variable, f)

    @classmethod
    def new_input(cls, cs, f):
        """공개 입력 불리언을 할당한다."""
        return cls._allocate(cs, cs.new_input_variable, f)

    @classmethod
    def le_bits(cls, value, width):
        """정수를 LSB 우선 상수 비트 리스트로 변환한다 (룩업용)."""
        return [cls.constant((value >> i) & 1) for i in range(width)]

    @classmethod
    def be_bits(cls, value, width):
        """정수를 MSB 우선 상수 비트 리스트로 변환한다 (다중 선택용)."""
        return list(reversed(cls.le_bits(value, width)))

    # ─── 조회 ───

    def lc(self):
        """이 불리언의 선형결합."""
        return self._lc

    def is_constant(self):
        return self.cs is None

    def has_value(self):
        return self._value is not None

    def value(self):
        """할당된 bool 값.

        Raises:
            AssignmentMissing: setup 모드라 값이 없을 때
        """
        if self._value is None:
            raise AssignmentMissing("불리언에 할당된 값이 없습니다")
        return self._value

    def __repr__(self):
        if self.is_constant():
            return f"Boolean.constant({self._value})"
        return f"Boolean({self._lc}, value={self._value})"

    # ─── 논리 연산 ───

    def not_(self):
        """1 − b. 제약 없음."""
        value = None if self._value is None else not self._value
        return Boolean(LinearCombination.constant(1) - self._lc, value, self.cs)

    def and_(self, other):
        """a AND b. 둘 다 변수이면 a · b = r 제약 1개."""
        if self.is_constant():
            return other if self._value else Boolean.constant(False)
        if other.is_constant():
            return self if other._value else Boolean.constant(False)
        cs = self.cs
        var = cs.new_witness_variable(lambda: 1 if (self.value() and other.value()) else 0)
        value = None
        if self.has_value() and other.has_value():
            value = self._value and other._value
        result = Boolean(LinearCombination.from_variable(var), value, cs)
        cs.enforce_constraint(self._lc, other._lc, result.lc())
        return result

    def enforce_equal(self, other):
        """두 불리언이 같음을 강제한다."""
        if self.is_constant() and other.is_constant():
            if self._value != other._value:
                raise Unsatisfiable("서로 다른 상수 불리언은 같을 수 없습니다")
            return
        cs = self.cs if self.cs is not None else other.cs
        cs.enforce_constraint(self._lc - other._lc, LinearCombination.constant(1), LinearCombination.zero())

    def select(self, true_value, false_value):
        """self ? true_value : false_value."""
        return type(true_value).conditionally_select(self, true_value, false_value)

    # ─── 선택 ───

    @classmethod
    def conditionally_select(cls, cond, true_value, false_value):
        """cond ? t : f. cond 가 상수면 제약 없음, 아니면 cond·(t − f) = r − f."""
        if cond.is_constant():
            return true_value if cond.value() else false_value
        if true_value.is_constant() and false_value.is_constant():
            if true_value.value() == false_value.value():
                return true_value
            return cond if true_value.value() else cond.not_()

        cs = cond.cs
        var = cs.new_witness_variable(
            lambda: 1 if (true_value.value() if cond.value() else false_value.value()) else 0
        )
        value = None
        if cond.has_value() and true_value.has_value() and false_value.has_value():
            value = true_value._value if cond._value else false_value._value
        result = cls(LinearCombination.from_variable(var), value, cs)
        cs.enforce_constraint(
            cond.lc(),
            true_value.lc() - false_value.lc(),
            result.lc() - false_value.lc(),
        )
        return result

    @classmethod
    def weighted_sum(cls, conditions, values):
        """Σ conditions[i] AND values[i].

        conditions 중 정확히 하나만 1이므로 합도 0 또는 1이다.
        변수 쌍마다 AND 제약 1개.
        """
        products = [c.and_(v) for c, v in zip(conditions, values)]
        lc = LinearCombination.zero()
        for p in products:
            lc = lc + p.lc()
        value = None
        if all(p.has_value() for p in products):
            value = any(p.value() for p in products)
        cs = next((p.cs for p in products if p.cs is not None), None)
        return cls.from_lc(lc, value, cs)


# 상수 불리언
Boolean.TRUE = Boolean.constant(True)
Boolean.FALSE = Boolean.constant(False)
TRUE = Boolean.TRUE
FALSE = Boolean.FALSE
