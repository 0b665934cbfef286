"""
Selection Flask Blueprint 테스트.

테스트 대상:
  - POST /select/index (repeated / sum_of_conditions), 사전 조건 위반 → 400
  - POST /select/lookup2, /select/lookup3
  - POST /select/clear
  - r1cs_serializers
"""

import pytest

from app import app as flask_app, select_db
from zkp.r1cs.field import FR, CURVE_ORDER
from zkp.r1cs.constraint_system import ConstraintSystem
from zkp.r1cs.fp_var import FpVar
from r1cs_serializers import (
    serialize_fr,
    deserialize_fr,
    deserialize_fr_list,
    serialize_lc,
    serialize_constraints,
    serialize_matrices,
)


@pytest.fixture
def client():
    select_db.truncate()
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as c:
        yield c
    select_db.truncate()


# ─────────────────────────────────────────────────────────────────────
# /select/index
# ─────────────────────────────────────────────────────────────────────

class TestSelectIndex:

    def test_repeated(self, client):
        resp = client.post("/select/index", data={
            "bits": "110",
            "values": "10,11,12,13,14,15,16,17",
        }, follow_redirects=True)
        assert resp.status_code == 200
        data = resp.get_json()["index"]
        assert data["index"] == 6
        assert data["result"] == "16"
        assert data["satisfied"] is True
        assert data["method"] == "repeated"
        assert data["selection_constraints"] == 7

    def test_sum_of_conditions(self, client):
        resp = client.post("/select/index", data={
            "bits": "01",
            "values": "10,11,12,13",
            "method": "sum_of_conditions",
        }, follow_redirects=True)
        data = resp.get_json()["index"]
        assert data["result"] == "11"
        assert data["satisfied"] is True

    def test_tree(self, client):
        resp = client.post("/select/index", data={
            "bits": "10",
            "values": "10,11,12,13",
            "method": "tree",
        }, follow_redirects=True)
        data = resp.get_json()["index"]
        assert data["method"] == "tree"
        assert data["result"] == "12"
        assert data["selection_constraints"] == 3

    def test_matrices_stored(self, client):
        client.post("/select/index", data={"bits": "1", "values": "5,9"})
        data = client.get("/select/circuit").get_json()["index"]
        matrices = data["matrices"]
        assert len(matrices["A"]) == data["num_constraints"]
        assert matrices["r"][0] == "1"
        assert len(data["constraints"]) == data["num_constraints"]

    @pytest.mark.parametrize("form", [
        {"bits": "1", "values": "1,2,3"},
        {"bits": "10", "values": "1,2"},
        {"bits": "1x", "values": "1,2,3,4"},
        {"bits": "1", "values": "a,b"},
        {"bits": "1", "values": "1,2", "method": "nope"},
    ])
    def test_bad_input(self, client, form):
        resp = client.post("/select/index", data=form)
        assert resp.status_code == 400
        assert "error" in resp.get_json()
        assert client.get("/select/circuit").get_json()["index"] is None


# ─────────────────────────────────────────────────────────────────────
# /select/lookup2, /select/lookup3
# ─────────────────────────────────────────────────────────────────────

class TestLookupRoutes:

    def test_lookup2(self, client):
        resp = client.post("/select/lookup2", data={
            "bits": "01",
            "constants": "3,5,11,17",
        }, follow_redirects=True)
        data = resp.get_json()["lookup2"]
        assert data["result"] == "11"
        assert data["lookup_constraints"] == 1
        assert data["satisfied"] is True

    def test_lookup3_negates(self, client):
        resp = client.post("/select/lookup3", data={
            "bits": "101",
            "constants": "3,5,11,17",
        }, follow_redirects=True)
        data = resp.get_json()["lookup3"]
        assert data["result"] == str(CURVE_ORDER - 5)
        assert data["lookup_constraints"] == 2
        assert data["satisfied"] is True

    def test_lookup3_wrong_length(self, client):
        resp = client.post("/select/lookup3", data={"bits": "10", "constants": "3,5,11,17"})
        assert resp.status_code == 400

    def test_lookup2_wrong_constants(self, client):
        resp = client.post("/select/lookup2", data={"bits": "10", "constants": "3,5,11"})
        assert resp.status_code == 400

    def test_clear(self, client):
        client.post("/select/lookup2", data={"bits": "00", "constants": "1,2,3,4"})
        resp = client.post("/select/clear", follow_redirects=True)
        assert resp.get_json()["lookup2"] is None

    def test_index_page(self, client):
        data = client.get("/").get_json()
        assert data["index"] == "/select/index"


# ─────────────────────────────────────────────────────────────────────
# serializers
# ─────────────────────────────────────────────────────────────────────

class TestSerializers:

    def test_fr_roundtrip(self):
        assert serialize_fr(FR(12)) == "12"
        assert deserialize_fr("12") == FR(12)
        assert serialize_fr(None) is None

    def test_fr_list_from_string(self):
        assert deserialize_fr_list("1, 2,3") == [FR(1), FR(2), FR(3)]
        assert deserialize_fr_list("") == []

    def test_lc_and_constraints(self):
        cs = ConstraintSystem()
        x = FpVar.new_witness(cs, lambda: 3)
        y = FpVar.new_witness(cs, lambda: 4)
        x * y
        assert serialize_lc((x + 2).lc()) == {"one": "2", "w1": "1"}
        table = serialize_constraints(cs)
        assert table == [{
            "index": 0,
            "label": None,
            "a": {"w1": "1"},
            "b": {"w2": "1"},
            "c": {"w3": "1"},
        }]
        matrices = serialize_matrices(cs)
        assert matrices["r"] == ["1", "3", "4", "12"]
        assert matrices["A"] == [["0", "1", "0", "0"]]
