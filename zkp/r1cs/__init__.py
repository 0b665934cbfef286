"""
R1CS 선택/룩업 가젯 패키지
===========================

셀렉터 비트로 후보 값을 고르는 연산을 R1CS 곱셈 제약으로 표현한다.

  ┌──────────────────────────────────────────────────────┐
  │  field              FR (bn128 스칼라 필드)            │
  │  linear_combination 선형결합, 변수                    │
  │  constraint_system  제약 시스템 (호출자 소유 컨텍스트) │
  ├──────────────────────────────────────────────────────┤
  │  boolean            Boolean 배선                      │
  │  fp_var             FpVar (필드 원소 가젯)            │
  │  edwards            AffineVar (Baby Jubjub 점 가젯)   │
  ├──────────────────────────────────────────────────────┤
  │  select             양자택일 / 다중 선택 / 룩업        │
  └──────────────────────────────────────────────────────┘

사용 예시:
    >>> from zkp.r1cs import ConstraintSystem, Boolean, FpVar, select_by_index
    >>> cs = ConstraintSystem()
    >>> position = [Boolean.new_witness(cs, lambda b=b: b) for b in (True, False)]
    >>> values = [FpVar.new_witness(cs, lambda v=v: v) for v in (10, 20, 30, 40)]
    >>> select_by_index(position, values).value()   # FR(30)
    >>> cs.is_satisfied()                           # True
"""

from zkp.r1cs.field import FR, CURVE_ORDER
from zkp.r1cs.linear_combination import LinearCombination, Variable, ONE
from zkp.r1cs.constraint_system import (
    ConstraintSystem,
    SynthesisError,
    AssignmentMissing,
    Unsatisfiable,
)
from zkp.r1cs.select import (
    CondSelectGadget,
    TwoBitLookupGadget,
    ThreeBitCondNegLookupGadget,
    conditionally_select,
    select_by_index,
    repeated_selection,
    sum_of_conditions,
    two_bit_lookup,
    three_bit_cond_neg_lookup,
)
from zkp.r1cs.boolean import Boolean
from zkp.r1cs.fp_var import FpVar
from zkp.r1cs.edwards import AffineVar

__all__ = [
    "FR",
    "CURVE_ORDER",
    "LinearCombination",
    "Variable",
    "ONE",
    "ConstraintSystem",
    "SynthesisError",
    "AssignmentMissing",
    "Unsatisfiable",
    "CondSelectGadget",
    "TwoBitLookupGadget",
    "ThreeBitCondNegLookupGadget",
    "conditionally_select",
    "select_by_index",
    "repeated_selection",
    "sum_of_conditions",
    "two_bit_lookup",
    "three_bit_cond_neg_lookup",
    "Boolean",
    "FpVar",
    "AffineVar",
]
