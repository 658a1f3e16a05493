import pytest

from doclint.config import PairingOptions
from doclint.document import load
from doclint.errors import ConfigError
from doclint.rules.pairing import check_count_companions, companion_candidates
from doclint.utils import DERIVATIONS


def _queries(*queries: str):
    return load("<businessObjectModel><queries>" + "".join(queries) + "</queries></businessObjectModel>")


def test_collection_query_without_companion_is_flagged():
    document = _queries('<query name="findActive" returnType="java.util.List"/>')

    hits = list(check_count_companions(document, PairingOptions()))

    assert len(hits) == 1
    assert "countForFindActive" in hits[0].message


def test_companion_satisfies_the_pairing():
    document = _queries(
        '<query name="findActive" returnType="java.util.List"/>',
        '<query name="countForFindActive" returnType="java.lang.Long"/>',
    )

    assert list(check_count_companions(document, PairingOptions())) == []


def test_order_by_variant_reuses_base_companion():
    document = _queries(
        '<query name="findActiveOrderByName" returnType="java.util.List"/>',
        '<query name="countForFindActive" returnType="java.lang.Long"/>',
    )

    assert list(check_count_companions(document, PairingOptions())) == []
    only_capitalize = PairingOptions(derivations=("capitalize",))
    assert len(list(check_count_companions(document, only_capitalize))) == 1


def test_single_results_and_aggregates_are_exempt():
    document = _queries(
        '<query name="findByReference" returnType="com.acme.PBInvoice"/>',
        '<customQuery name="countByState" returnType="java.util.List"/>',
        '<query name="countForSomething" returnType="java.util.List"/>',
    )

    assert list(check_count_companions(document, PairingOptions())) == []


def test_custom_queries_are_checked_too():
    document = _queries('<customQuery name="query1" returnType="java.util.List"/>')

    assert len(list(check_count_companions(document, PairingOptions()))) == 1


def test_derivations_are_pluggable_per_run():
    options = PairingOptions(
        derivations=("suffix",), custom_derivations={"suffix": lambda name, prefix: name + "Count"}
    )
    document = _queries(
        '<query name="findActive" returnType="java.util.List"/>',
        '<query name="findActiveCount" returnType="java.lang.Long"/>',
    )

    assert list(check_count_companions(document, options)) == []
    assert companion_candidates("findActive", PairingOptions()) == ["countForFindActive", "countForfindActive"]


def test_custom_derivations_do_not_leak_into_other_runs():
    PairingOptions(custom_derivations={"suffix": lambda name, prefix: name + "Count"})

    assert "suffix" not in DERIVATIONS
    with pytest.raises(ConfigError):
        PairingOptions(derivations=("suffix",))


def test_unknown_derivation_is_rejected():
    with pytest.raises(ConfigError, match="reverse"):
        PairingOptions(derivations=("reverse",))
