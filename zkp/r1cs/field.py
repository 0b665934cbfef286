"""
R1CS 기반 모듈: 유한체(Finite Field)
=====================================

선택(selection)/룩업(lookup) 가젯이 제약을 만드는 스칼라 필드를 정의한다.

**유한체 FR**:
  bn128 타원곡선의 스칼라 필드 (scalar field). R1CS의 모든 선형결합 계수와
  변수 할당값은 이 필드의 원소이다.
  - 위수(order) p ≈ 2^254, 소수체(prime field)
  - Baby Jubjub 곡선은 이 필드 위에 정의된 "내장(embedded)" 곡선이다

사용 예시:
    >>> from zkp.r1cs.field import FR, to_fr
    >>> a = FR(3)
    >>> -a == FR(CURVE_ORDER - 3)   # True
    >>> to_fr(5)                    # FR(5)
"""

from py_ecc.fields import bn128_FQ as FQ
from py_ecc import bn128


class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    속성:
        field_modulus: bn128 곡선 위수 (소수 p)
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order


def to_fr(value):
    """정수 또는 FR 값을 FR로 변환한다.

    Args:
        value: 정수 또는 FR 원소 (음수 정수는 모듈러 환원된다)

    Returns:
        FR: 변환된 필드 원소
    """
    if isinstance(value, FR):
        return value
    return FR(int(value) % CURVE_ORDER)
