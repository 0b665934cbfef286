"""
R1CS 선형결합 (Linear Combination)
===================================

회로 변수들의 아핀(affine) 식 Σ cᵢ·xᵢ + c₀ 를 표현한다.

**변수 인덱스 규칙**:
  할당 벡터 r = [1, 공개입력..., 비공개 witness...] 의 인덱스를 그대로 쓴다.
  인덱스 0은 항상 1인 상수 배선 ONE 이다. 상수항 c₀는 ONE의 계수로 저장한다.

  예: x = w₀ + 5·w₂ + 7  →  {ONE: 7, 0: 1, 2: 5}

**연산**:
  - 덧셈, 뺄셈, 부호 반전, 스칼라 곱은 제약 없이 계산된다
  - 두 비상수 선형결합의 곱은 선형결합 연산이 아니다.
    ConstraintSystem.enforce_constraint 로 곱셈 제약을 추가해야 한다

사용 예시:
    >>> x = LinearCombination.from_variable(Variable(1))
    >>> y = x * 3 + LinearCombination.constant(5)
    >>> y.evaluate([FR(1), FR(2)])   # FR(11)
"""

from zkp.r1cs.field import FR, to_fr


class Variable:
    """할당 벡터의 한 칸을 가리키는 변수.

    속성:
        index: 할당 벡터 r 에서의 위치 (0은 상수 ONE)
    """

    __slots__ = ("index",)

    def __init__(self, index):
        self.index = index

    def __eq__(self, other):
        return isinstance(other, Variable) and self.index == other.index

    def __hash__(self):
        return hash(("Variable", self.index))

    def __lt__(self, other):
        return self.index < other.index

    def __repr__(self):
        if self.index == 0:
            return "Variable(ONE)"
        return f"Variable({self.index})"


# 상수 1 배선
ONE = Variable(0)


class LinearCombination:
    """변수 → FR 계수 매핑으로 표현한 선형결합.

    계수가 0인 항은 저장하지 않는다. 모든 연산은 새 객체를 반환하므로
    호출자 입장에서 선형결합은 불변(immutable)이다.
    """

    def __init__(self, terms=None):
        self.terms = {}
        if terms:
            for var, coeff in terms.items():
                coeff = to_fr(coeff)
                if coeff != FR(0):
                    self.terms[var] = coeff

    @classmethod
    def zero(cls):
        """0 선형결합."""
        return cls()

    @classmethod
    def constant(cls, value):
        """상수 선형결합: value · ONE."""
        return cls({ONE: value})

    @classmethod
    def from_variable(cls, var, coeff=1):
        """단일 변수 선형결합: coeff · var."""
        return cls({var: coeff})

    def is_constant(self):
        """ONE 이외의 변수를 포함하지 않으면 True."""
        return all(var == ONE for var in self.terms)

    def constant_term(self):
        """상수항 c₀ (ONE 의 계수)."""
        return self.terms.get(ONE, FR(0))

    def variables(self):
        """포함된 변수 목록 (인덱스 순)."""
        return sorted(self.terms)

    def evaluate(self, assignment):
        """할당 벡터 위에서 선형결합 값을 계산한다.

        Args:
            assignment: 인덱스로 접근 가능한 FR 리스트 (assignment[0] == 1)

        Returns:
            FR: Σ cᵢ·r[i]
        """
        total = FR(0)
        for var, coeff in self.terms.items():
            if var == ONE:
                total += coeff
            else:
                total += coeff * assignment[var.index]
        return total

    # ─── 산술 연산 ───

    def _combine(self, other, sign):
        if not isinstance(other, LinearCombination):
            other = LinearCombination.constant(other)
        terms = dict(self.terms)
        for var, coeff in other.terms.items():
            terms[var] = terms.get(var, FR(0)) + coeff * sign
        return LinearCombination(terms)

    def __add__(self, other):
        return self._combine(other, 1)

    def __radd__(self, other):
        return self._combine(other, 1)

    def __sub__(self, other):
        return self._combine(other, -1)

    def __rsub__(self, other):
        return (-self)._combine(other, 1)

    def __neg__(self):
        return LinearCombination({var: -coeff for var, coeff in self.terms.items()})

    def __mul__(self, scalar):
        if isinstance(scalar, LinearCombination):
            raise TypeError(
                "두 선형결합의 곱은 ConstraintSystem.enforce_constraint 로 표현해야 합니다"
            )
        scalar = to_fr(scalar)
        return LinearCombination({var: coeff * scalar for var, coeff in self.terms.items()})

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, LinearCombination):
            return NotImplemented
        return self.terms == other.terms

    def __hash__(self):
        return hash(frozenset((var.index, int(c)) for var, c in self.terms.items()))

    def __len__(self):
        return len(self.terms)

    def __repr__(self):
        if not self.terms:
            return "LC(0)"
        parts = []
        for var in self.variables():
            coeff = int(self.terms[var])
            parts.append(str(coeff) if var == ONE else f"{coeff}*w{var.index}")
        return "LC(" + " + ".join(parts) + ")"
