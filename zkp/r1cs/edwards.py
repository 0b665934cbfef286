"""
Baby Jubjub 점 가젯 (AffineVar)
================================

회로 안의 twisted Edwards 아핀 점 (x, y). 좌표는 FpVar 이다.

선택/룩업은 좌표별로 FpVar 구현에 위임한다.
  - conditionally_select: 좌표마다 제약 1개 → 2개
  - two_bit_lookup:       좌표마다 제약 1개 → 2개
  - three_bit_cond_neg_lookup:
        −(x, y) = (−x, y) 이므로
        x 는 조건부 부호 반전 룩업, y 는 일반 2비트 룩업 → 2개

곡선 위에 있는지는 검사하지 않는다. 상수 테이블은 babyjubjub 모듈이 만든다.

사용 예시:
    >>> table = signed_window_table(BASE8)
    >>> bits = [Boolean.new_witness(cs, lambda: b) for b in (True, False, True)]
    >>> AffineVar.three_bit_cond_neg_lookup(bits, bits[0].and_(bits[1]), table).value()
    ... # point_neg(table[1])
"""

from zkp.r1cs.babyjubjub import to_point
from zkp.r1cs.fp_var import FpVar
from zkp.r1cs.select import (
    CondSelectGadget,
    TwoBitLookupGadget,
    ThreeBitCondNegLookupGadget,
    check_two_bit_lookup_args,
    check_three_bit_lookup_args,
)


class AffineVar(CondSelectGadget, TwoBitLookupGadget, ThreeBitCondNegLookupGadget):
    """좌표가 FpVar 인 twisted Edwards 점."""

    def __init__(self, x, y):
        self.x = x
        self.y = y

    @property
    def cs(self):
        return self.x.cs if self.x.cs is not None else self.y.cs

    @classmethod
    def constant(cls, point):
        x, y = to_point(point)
        return cls(FpVar.constant(x), FpVar.constant(y))

    @classmethod
    def new_witness(cls, cs, f):
        """점 witness 를 할당한다. f 는 (x, y) 를 반환하는 callable.

        f 는 setup 모드가 아닐 때 한 번만 호출된다.
        """
        point = None if cs.setup_mode else to_point(f())
        x = FpVar.new_witness(cs, lambda: point[0])
        y = FpVar.new_witness(cs, lambda: point[1])
        return cls(x, y)

    def is_constant(self):
        return self.x.is_constant() and self.y.is_constant()

    def has_value(self):
        return self.x.has_value() and self.y.has_value()

    def value(self):
        """(x, y) FR 튜플."""
        return (self.x.value(), self.y.value())

    def __repr__(self):
        return f"AffineVar(x={self.x!r}, y={self.y!r})"

    @classmethod
    def conditionally_select(cls, cond, true_value, false_value):
        return cls(
            FpVar.conditionally_select(cond, true_value.x, false_value.x),
            FpVar.conditionally_select(cond, true_value.y, false_value.y),
        )

    @classmethod
    def weighted_sum(cls, conditions, values):
        return cls(
            FpVar.weighted_sum(conditions, [v.x for v in values]),
            FpVar.weighted_sum(conditions, [v.y for v in values]),
        )

    @classmethod
    def two_bit_lookup(cls, bits, constants):
        check_two_bit_lookup_args(bits, constants)
        points = [to_point(p) for p in constants]
        return cls(
            FpVar.two_bit_lookup(bits, [p[0] for p in points]),
            FpVar.two_bit_lookup(bits, [p[1] for p in points]),
        )

    @classmethod
    def three_bit_cond_neg_lookup(cls, bits, b0b1, constants):
        check_three_bit_lookup_args(bits, constants)
        points = [to_point(p) for p in constants]
        return cls(
            FpVar.three_bit_cond_neg_lookup(bits, b0b1, [p[0] for p in points]),
            FpVar.two_bit_lookup(bits[:2], [p[1] for p in points]),
        )
