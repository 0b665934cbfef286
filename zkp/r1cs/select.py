"""
R1CS 선택(Selection) 및 룩업(Lookup) 가젯
==========================================

불리언 셀렉터 비트로 여러 후보 중 하나를 고르는 연산을 곱셈 제약으로 표현한다.
분기(branch)가 아니라, 어떤 셀렉터 값이 witness 되더라도 정확히 하나의 후보만
선택되도록 강제하는 고정 크기 제약 집합으로 환원하는 것이 핵심이다.

**양자택일 (two-way select)**:
  conditionally_select(cond, t, f) = f + cond·(t − f)
  선택 가능한 타입(selectable type)마다 구현이 다르다 (FpVar, Boolean, AffineVar).

**다중 선택 (multi-way select)**:
  position 비트 n개 (MSB 우선, position[0] = 최상위 비트) 로
  m = 2^n 개 후보 중 values[index] 를 고른다.

  1) 반복 선택 (repeated selection, 이진 트리) — 정식 구성
       level 0: bit = position[n-1] (LSB) 로 인접 쌍 선택 → m/2 개
       level 1: bit = position[n-2]              → m/4 개
       ...
       level n-1: bit = position[0] (MSB)        → 1 개
     양자택일 m − 1 번, 순차 깊이 n.

  2) 조건 합 (sum of conditions, 단일 가중합) — 보조 구성
       selectors[j]     = ∏_{k ∈ j} bit_k         (부분집합 곱)
       selector_sums[i] = Σ_{j ⊇ i} (−1)^|j−i| · selectors[j]
                        = [index == i]             (뫼비우스 반전)
       result           = Σ_i values[i] · selector_sums[i]

**룩업 테이블 (lookup tables)**:
  - two_bit_lookup:             b = bits[0] + 2·bits[1]  (LSB 우선!)
  - three_bit_cond_neg_lookup:  constants[b] · (−1 if bits[2] else 1)

  주의: 다중 선택은 MSB 우선, 룩업은 LSB 우선이다. 두 규약은 의도된 것이며
  서로 코드를 공유하지 않는다.

사용 예시:
    >>> cs = ConstraintSystem()
    >>> position = [Boolean.new_witness(cs, lambda: b) for b in (True, True, False)]
    >>> values = [FpVar.constant(v) for v in range(8)]
    >>> select_by_index(position, values).value()   # FR(6)
"""

import logging
from abc import ABC, abstractmethod

from zkp.r1cs.linear_combination import LinearCombination

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# 선택 가능 타입 인터페이스
# ─────────────────────────────────────────────────────────────────────

class CondSelectGadget(ABC):
    """양자택일이 가능한 회로 값 타입의 인터페이스."""

    @classmethod
    @abstractmethod
    def conditionally_select(cls, cond, true_value, false_value):
        """cond 가 1 이면 true_value, 0 이면 false_value 를 반환한다.

        cond 의 불리언 제약은 Boolean 쪽 책임이다. 입력 값은 변경되지 않으며
        결과는 항상 새 값이다.

        Args:
            cond: Boolean
            true_value, false_value: 같은 타입의 값

        Returns:
            선택된 새 값
        """

    @classmethod
    def conditionally_select_power_of_two_vector(cls, position, values):
        """position (MSB 우선) 이 가리키는 values 원소를 반환한다.

        예: 6번째 원소 (0b110) → position = [TRUE, TRUE, FALSE]
        """
        return repeated_selection(position, values)

    @classmethod
    @abstractmethod
    def weighted_sum(cls, conditions, values):
        """Σ conditions[i] · values[i] 를 계산한다 (sum_of_conditions 용).

        conditions 는 정확히 하나만 1인 Boolean 리스트이다.
        """


class TwoBitLookupGadget(ABC):
    """2비트로 4개짜리 상수 테이블을 조회하는 타입의 인터페이스."""

    @classmethod
    @abstractmethod
    def two_bit_lookup(cls, bits, constants):
        """b = bits[0] + 2·bits[1] 로 해석하여 constants[b] 를 반환한다.

        예: bits == [0, 1], constants == [0, 1, 2, 3] → 2
        """


class ThreeBitCondNegLookupGadget(ABC):
    """3비트 룩업: 하위 2비트로 조회하고 bits[2] 로 부호를 뒤집는다."""

    @classmethod
    @abstractmethod
    def three_bit_cond_neg_lookup(cls, bits, b0b1, constants):
        """b = bits[0] + 2·bits[1], c = −1 if bits[2] else 1 일 때 constants[b]·c.

        b0b1 은 bits[0] AND bits[1] 이다. 같은 비트로 여러 테이블을 조회할 때
        호출자가 재사용할 수 있도록 인자로 받는다.

        예: bits == [1, 0, 1], constants == [0, 1, 2, 3] → −1
        """


# ─────────────────────────────────────────────────────────────────────
# 사전 조건 검사 (제약 추가 전에 수행)
# ─────────────────────────────────────────────────────────────────────

def check_power_of_two_vector_args(position, values):
    """m = len(values) 가 2의 거듭제곱이고 n = log2(m) 인지 검사한다.

    Raises:
        ValueError: 길이가 맞지 않을 때
    """
    m = len(values)
    n = len(position)
    if m == 0 or (m & (m - 1)) != 0:
        raise ValueError(f"후보 개수는 2의 거듭제곱이어야 합니다: {m}")
    if (1 << n) != m:
        raise ValueError(f"셀렉터 비트 {n}개로는 후보 {m}개를 지정할 수 없습니다 (2^{n} != {m})")


def check_two_bit_lookup_args(bits, constants):
    """bits 길이 2, constants 길이 4 인지 검사한다."""
    if len(bits) != 2:
        raise ValueError(f"two_bit_lookup 은 비트 2개가 필요합니다: {len(bits)}")
    if len(constants) != 4:
        raise ValueError(f"two_bit_lookup 은 상수 4개가 필요합니다: {len(constants)}")


def check_three_bit_lookup_args(bits, constants):
    """bits 길이 3, constants 길이 4 인지 검사한다."""
    if len(bits) != 3:
        raise ValueError(f"three_bit_cond_neg_lookup 은 비트 3개가 필요합니다: {len(bits)}")
    if len(constants) != 4:
        raise ValueError(f"three_bit_cond_neg_lookup 은 상수 4개가 필요합니다: {len(constants)}")


# ─────────────────────────────────────────────────────────────────────
# 다중 선택 엔진
# ─────────────────────────────────────────────────────────────────────

def _constraint_count(items):
    for item in items:
        cs = getattr(item, "cs", None)
        if cs is not None:
            return cs, cs.num_constraints
    return None, 0


def repeated_selection(position, values):
    """이진 선택 트리로 values[index] 를 고른다.

    n 개 레벨을 LSB 부터 처리하며, 각 레벨에서 인접 쌍 (values[2j], values[2j+1])
    중 비트가 1이면 values[2j+1] 을 고른다. 양자택일은 정확히 m − 1 번이다.

    Args:
        position: Boolean 리스트 (MSB 우선)
        values: 선택 가능한 값 리스트, 길이 2^len(position)

    Returns:
        values[index] 와 같은 값

    Raises:
        ValueError: 길이 사전 조건 위반 (제약 추가 전)
    """
    check_power_of_two_vector_args(position, values)
    n = len(position)
    cls = type(values[0])
    cs, before = _constraint_count(list(position) + list(values))

    current = list(values)
    # 트리를 아래에서 위로, 레벨 순서대로 순회한다
    for i in range(n):
        bit = position[n - 1 - i]
        current = [
            cls.conditionally_select(bit, current[j + 1], current[j])
            for j in range(0, len(current), 2)
        ]

    if cs is not None:
        logger.debug(
            "repeated_selection: n=%d m=%d constraints=%d",
            n, len(values), cs.num_constraints - before,
        )
    return current[0]


def _popcount(x):
    return bin(x).count("1")


def sum_of_conditions(position, values):
    """단일 가중합으로 values[index] 를 고른다.

    1) selectors[j]: j 의 켜진 비트들에 해당하는 셀렉터 비트의 곱.
       selectors[0] = 1, selectors[2^i] = bit_i (LSB 기준 i번째 비트),
       2^i < j < 2^(i+1) 이면 selectors[j] = selectors[2^i] AND selectors[j − 2^i].
       (m − n − 1 개의 AND 제약)
    2) selector_sums[i] = Σ_{j ⊇ i} (−1)^popcount(j − i) · selectors[j]
       는 index == i 의 지시자(indicator)이다. 선형이므로 제약이 없다.
    3) result = Σ_i values[i] · selector_sums[i]  (타입의 weighted_sum)

    Args, Returns, Raises: repeated_selection 과 같다.
    """
    from zkp.r1cs.boolean import Boolean

    check_power_of_two_vector_args(position, values)
    m = len(values)
    n = len(position)
    cls = type(values[0])
    cs, before = _constraint_count(list(position) + list(values))

    # bits[i] 는 인덱스의 i번째 하위 비트
    bits = [position[n - 1 - i] for i in range(n)]

    selectors = [Boolean.TRUE] * m
    for i in range(n):
        selectors[1 << i] = bits[i]
        for j in range((1 << i) + 1, 1 << (i + 1)):
            selectors[j] = selectors[1 << i].and_(selectors[j - (1 << i)])

    index = None
    if all(bit.has_value() for bit in bits):
        index = sum(1 << i for i, bit in enumerate(bits) if bit.value())

    bit_cs = next((bit.cs for bit in bits if bit.cs is not None), None)
    indicators = []
    for i in range(m):
        lc = LinearCombination.zero()
        for j in range(m):
            if i | j == j:
                if _popcount(j - i) % 2 == 0:
                    lc = lc + selectors[j].lc()
                else:
                    lc = lc - selectors[j].lc()
        value = None if index is None else index == i
        indicators.append(Boolean.from_lc(lc, value, bit_cs))

    result = cls.weighted_sum(indicators, values)

    if cs is not None:
        logger.debug(
            "sum_of_conditions: n=%d m=%d constraints=%d",
            n, m, cs.num_constraints - before,
        )
    return result


# ─────────────────────────────────────────────────────────────────────
# 공개 진입점
# ─────────────────────────────────────────────────────────────────────

def conditionally_select(cond, true_value, false_value):
    """cond ? true_value : false_value. true_value 의 타입 구현을 사용한다."""
    return type(true_value).conditionally_select(cond, true_value, false_value)


def select_by_index(position, values):
    """position (MSB 우선) 이 인코딩하는 정수 번째 원소를 반환한다.

    항상 반복 선택(repeated_selection) 결과를 반환한다.

    Raises:
        ValueError: len(values) != 2^len(position) (제약 추가 전)
    """
    check_power_of_two_vector_args(position, values)
    return type(values[0]).conditionally_select_power_of_two_vector(position, values)


def two_bit_lookup(bits, constants, cls=None):
    """bits (LSB 우선) 로 4개짜리 상수 테이블을 조회한다.

    Args:
        bits: Boolean 2개
        constants: 상수 4개
        cls: 결과 타입 (기본값 FpVar)

    Raises:
        ValueError: 길이 사전 조건 위반 (제약 추가 전)
    """
    check_two_bit_lookup_args(bits, constants)
    if cls is None:
        from zkp.r1cs.fp_var import FpVar as cls
    return cls.two_bit_lookup(bits, constants)


def three_bit_cond_neg_lookup(bits, constants, cls=None, b0b1=None):
    """bits[0..1] (LSB 우선) 로 조회하고 bits[2] 가 1이면 부호를 뒤집는다.

    Args:
        bits: Boolean 3개
        constants: 상수 4개
        cls: 결과 타입 (기본값 FpVar)
        b0b1: bits[0] AND bits[1] (없으면 계산한다, 제약 1개)

    Raises:
        ValueError: 길이 사전 조건 위반 (제약 추가 전)
    """
    check_three_bit_lookup_args(bits, constants)
    if cls is None:
        from zkp.r1cs.fp_var import FpVar as cls
    if b0b1 is None:
        b0b1 = bits[0].and_(bits[1])
    return cls.three_bit_cond_neg_lookup(bits, b0b1, constants)
