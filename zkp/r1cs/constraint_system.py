"""
R1CS 제약 시스템 (Constraint System)
=====================================

가젯들이 변수를 할당하고 곱셈 제약을 추가하는 공유 컨텍스트 객체.

**R1CS 제약**:
  각 제약은 세 선형결합 A, B, C에 대해

    ⟨A, r⟩ · ⟨B, r⟩ = ⟨C, r⟩

  를 요구한다. r = [1, 공개입력..., witness...] 는 할당 벡터이다.

**할당 벡터 배치**:
  r[0] = 1 (ONE), 이어서 공개 입력, 그 뒤에 비공개 witness.
  공개 입력과 witness는 할당 순서대로 따로 쌓이며, 최종 인덱스는
  to_matrices() 에서 [ONE | 입력 | witness] 순서로 확정된다.

**setup 모드**:
  setup_mode=True 이면 witness 값을 계산하지 않는다 (값은 None).
  제약 개수와 구조는 값이 있을 때와 동일하다.

이 객체는 한 번의 회로 구성 동안 호출자가 소유하며, 모든 가젯에
참조로 전달된다. 전역 상태는 없다.

사용 예시:
    >>> cs = ConstraintSystem()
    >>> x = cs.new_witness_variable(lambda: FR(3))
    >>> lc_x = LinearCombination.from_variable(x)
    >>> cs.enforce_constraint(lc_x, lc_x, LinearCombination.constant(9))
    >>> cs.is_satisfied()   # True
"""

import logging

from zkp.r1cs.field import FR, to_fr
from zkp.r1cs.linear_combination import LinearCombination, Variable, ONE

logger = logging.getLogger(__name__)


class SynthesisError(Exception):
    """제약 시스템이 보고하는 오류의 기반 클래스."""


class AssignmentMissing(SynthesisError):
    """setup 모드 등에서 변수 값이 없는데 값을 요청했을 때."""


class Unsatisfiable(SynthesisError):
    """구성 중에 이미 만족 불가능한 상수 제약이 발견되었을 때."""


class Constraint:
    """단일 R1CS 제약 a · b = c."""

    __slots__ = ("a", "b", "c", "label")

    def __init__(self, a, b, c, label=None):
        self.a = a
        self.b = b
        self.c = c
        self.label = label

    def is_satisfied(self, assignment):
        return self.a.evaluate(assignment) * self.b.evaluate(assignment) == self.c.evaluate(assignment)

    def __repr__(self):
        return f"Constraint({self.label!r}: {self.a} * {self.b} = {self.c})"


class ConstraintSystem:
    """R1CS 제약 시스템.

    속성:
        setup_mode: True 이면 witness 값을 계산하지 않는다
        constraints: Constraint 리스트 (추가 순서)
        instance_values: 공개 입력 값 리스트
        witness_values: witness 값 리스트
    """

    def __init__(self, setup_mode=False):
        self.setup_mode = setup_mode
        self.constraints = []
        self.instance_values = []
        self.witness_values = []
        # 할당 순서대로 (kind, 위치) 를 기록한다
        self._variables = []

    # ─── 변수 할당 ───

    def _compute(self, f):
        if self.setup_mode:
            return None
        return to_fr(f())

    def new_input_variable(self, f):
        """공개 입력 변수를 할당한다.

        Args:
            f: 값을 반환하는 인자 없는 callable. setup 모드에서는 호출되지 않는다.
               f 가 던지는 예외는 그대로 전파된다.

        Returns:
            Variable: 새 변수
        """
        value = self._compute(f)
        self.instance_values.append(value)
        return self._register("input", len(self.instance_values) - 1)

    def new_witness_variable(self, f):
        """비공개 witness 변수를 할당한다. 인자는 new_input_variable 과 같다."""
        value = self._compute(f)
        self.witness_values.append(value)
        return self._register("witness", len(self.witness_values) - 1)

    def _register(self, kind, position):
        self._variables.append((kind, position))
        return Variable(len(self._variables))

    # ─── 제약 ───

    def enforce_constraint(self, a, b, c, label=None):
        """곱셈 제약 a · b = c 를 추가한다.

        Args:
            a, b, c: LinearCombination
            label: 디버깅용 이름 (선택)
        """
        self.constraints.append(Constraint(a, b, c, label))
        if label is not None:
            logger.debug("constraint #%d: %s", len(self.constraints) - 1, label)

    @property
    def num_constraints(self):
        return len(self.constraints)

    @property
    def num_instance_variables(self):
        """공개 입력 수 (ONE 포함)."""
        return len(self.instance_values) + 1

    @property
    def num_witness_variables(self):
        return len(self.witness_values)

    # ─── 값 ───

    def value_of(self, var):
        """변수의 할당값을 반환한다.

        Raises:
            AssignmentMissing: setup 모드이거나 값이 없을 때
        """
        if var == ONE:
            return FR(1)
        kind, position = self._variables[var.index - 1]
        values = self.instance_values if kind == "input" else self.witness_values
        value = values[position]
        if value is None:
            raise AssignmentMissing(f"변수 {var.index}에 할당된 값이 없습니다")
        return value

    def assignment(self):
        """할당 순서 기준 전체 벡터 [1, v₁, v₂, ...] 를 반환한다.

        Raises:
            AssignmentMissing: setup 모드일 때
        """
        return [FR(1)] + [self.value_of(Variable(i)) for i in range(1, len(self._variables) + 1)]

    def which_is_unsatisfied(self):
        """처음으로 만족되지 않는 제약의 label (없으면 인덱스) 을 반환한다.

        모든 제약이 만족되면 None.
        """
        assignment = self.assignment()
        for i, constraint in enumerate(self.constraints):
            if not constraint.is_satisfied(assignment):
                return constraint.label if constraint.label is not None else i
        return None

    def is_satisfied(self):
        """모든 제약이 현재 할당에서 만족되는지 확인한다."""
        return self.which_is_unsatisfied() is None

    # ─── 행렬 표현 ───

    def _column_order(self):
        """할당 순서 인덱스 → [ONE | 입력 | witness] 열 인덱스."""
        columns = {0: 0}
        num_inputs = len(self.instance_values)
        for i, (kind, position) in enumerate(self._variables, start=1):
            if kind == "input":
                columns[i] = 1 + position
            else:
                columns[i] = 1 + num_inputs + position
        return columns

    def to_matrices(self):
        """R1CS 를 (r, A, B, C) 행렬 형태로 변환한다.

        행은 제약, 열은 변수이다. 열 순서는 [ONE | 공개입력 | witness].
        각 행 i 는 ⟨A_i, r⟩ · ⟨B_i, r⟩ = ⟨C_i, r⟩ 를 만족해야 한다.

        Returns:
            tuple: (r, A, B, C)
                r: FR 리스트 (setup 모드에서는 None)
                A, B, C: 정수 행렬 (list of list)
        """
        columns = self._column_order()
        width = len(self._variables) + 1

        def to_row(lc):
            row = [0] * width
            for var, coeff in lc.terms.items():
                row[columns[var.index]] = int(coeff)
            return row

        A = [to_row(c.a) for c in self.constraints]
        B = [to_row(c.b) for c in self.constraints]
        C = [to_row(c.c) for c in self.constraints]

        if self.setup_mode:
            r = None
        else:
            r = [FR(1)] + list(self.instance_values) + list(self.witness_values)
        return r, A, B, C
