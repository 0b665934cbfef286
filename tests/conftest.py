import sys
import os
import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from zkp.r1cs.constraint_system import ConstraintSystem
from zkp.r1cs.boolean import Boolean
from zkp.r1cs.fp_var import FpVar


@pytest.fixture
def cs():
    """값을 계산하는 일반 제약 시스템."""
    return ConstraintSystem()


@pytest.fixture
def setup_cs():
    """witness 값을 계산하지 않는 setup 모드 제약 시스템."""
    return ConstraintSystem(setup_mode=True)


def witness_bits(cs, bits):
    """bool 리스트를 Boolean witness 리스트로 할당한다."""
    return [Boolean.new_witness(cs, lambda b=b: b) for b in bits]


def be_bits(value, width):
    """정수 → MSB 우선 bool 리스트."""
    return [bool((value >> (width - 1 - i)) & 1) for i in range(width)]


def witness_values(cs, values):
    """정수 리스트를 FpVar witness 리스트로 할당한다."""
    return [FpVar.new_witness(cs, lambda v=v: v) for v in values]
