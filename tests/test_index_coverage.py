from doclint.config import IndexCoverageOptions
from doclint.document import load
from doclint.rules.index_coverage import check_query_field_indexes, referenced_fields, split_clauses


def test_indexed_filter_field_is_covered():
    document = load(
        """
<businessObjectModel>
  <index name="IDX_STATUS"><fieldNames><fieldName>status</fieldName></fieldNames></index>
  <query name="findActive" content="SELECT p FROM PBTask p WHERE p.status = :status"/>
</businessObjectModel>
"""
    )

    assert list(check_query_field_indexes(document, IndexCoverageOptions())) == []


def test_unindexed_filter_and_sort_fields_are_reported_once():
    document = load(
        """
<businessObjectModel>
  <query name="findByOwner"
         content="SELECT p FROM PBTask p WHERE p.owner = :owner OR p.owner IS NULL ORDER BY p.dueDate DESC, p.persistenceId"/>
</businessObjectModel>
"""
    )

    hits = list(check_query_field_indexes(document, IndexCoverageOptions()))

    assert [hit.message.split("'")[1] for hit in hits] == ["owner", "dueDate"]
    assert all("findByOwner" in hit.message for hit in hits)


def test_unique_constraints_and_field_paths_count_as_indexes():
    document = load(
        """
<businessObjectModel>
  <uniqueConstraint name="UC_REF"><fieldNames><fieldName>reference</fieldName></fieldNames></uniqueConstraint>
  <index name="IDX_CITY"><fieldPath>address.city</fieldPath></index>
  <query name="findByRef" content="SELECT p FROM PBInvoice p WHERE p.reference = :ref AND p.city = :city"/>
</businessObjectModel>
"""
    )

    assert list(check_query_field_indexes(document, IndexCoverageOptions())) == []


def test_select_and_from_clauses_are_ignored():
    fields = referenced_fields(
        "SELECT p.name FROM PBTask p JOIN p.owner o WHERE o.login = :login AND p.label = 'a.b'",
        ("WHERE",),
    )

    assert fields == ["login", "label"]


def test_split_clauses_normalizes_keywords():
    clauses = split_clauses("select p from T p left  join p.x x on x.id = p.xid order   by p.name")

    assert [clause for clause, _ in clauses] == ["SELECT", "FROM", "JOIN", "ON", "ORDER BY"]


def test_queries_without_content_are_skipped():
    document = load("<model><query name='findAll'/></model>")

    assert list(check_query_field_indexes(document, IndexCoverageOptions())) == []


def test_stopwords_match_case_insensitively():
    document = load(
        """
<businessObjectModel>
  <query name="findRecent" content="SELECT p FROM PBTask p WHERE p.PERSISTENCEID > :id ORDER BY p.persistenceversion"/>
</businessObjectModel>
"""
    )

    assert list(check_query_field_indexes(document, IndexCoverageOptions())) == []
