"""
Unit Tests for DispatcherProjector.

Test Aspects Covered:
    ✅ Business Logic: RECORDS/SET/TARGETS/DEST walk
    ✅ Error Handling: Missing or non-integer set ID
    ✅ Edge Cases: Empty sets, several sets, missing URI/FLAGS
"""

from __future__ import annotations

from typing import Tuple

import pytest

from kamailio_exporter.domain.exceptions import FieldDecodeError, MissingSetID
from kamailio_exporter.domain.value_objects import DecodedField
from kamailio_exporter.projectors.dispatcher import (
    TARGET_METRIC,
    DispatcherProjector,
    DispatcherTarget,
    parse_dispatcher_targets,
)

G, V = DecodedField.group, DecodedField.terminal


def dest(uri: str, flags: str) -> DecodedField:
    return G("DEST", (V("URI", uri), V("FLAGS", flags), V("PRIORITY", 0)))


def dispatcher_set(set_id, *dests: DecodedField) -> DecodedField:
    items: Tuple[DecodedField, ...] = ()
    if set_id is not None:
        items += (V("ID", set_id),)
    items += (G("TARGETS", dests),)
    return G("SET", items)


def response(*sets: DecodedField) -> DecodedField:
    return G("", (V("NRSETS", len(sets)), G("RECORDS", sets)))


class TestDispatcherTargets:
    """Tests for target parsing."""

    def test_targets_of_one_set(self) -> None:
        """
        SCENARIO: SET with ID 2 and two destinations
        EXPECTED: Two targets, labeled with uri, flags and setid "2"
        """
        # Arrange
        root = response(
            dispatcher_set(2, dest("sip:10.0.0.1", "AP"), dest("sip:10.0.0.2", "D"))
        )

        # Act
        metrics = DispatcherProjector().project(root)

        # Assert
        targets = metrics[TARGET_METRIC]
        assert [t.value for t in targets] == [1, 1]
        assert targets[0].labels == {"uri": "sip:10.0.0.1", "flags": "AP", "setid": "2"}
        assert targets[1].labels == {"uri": "sip:10.0.0.2", "flags": "D", "setid": "2"}

    def test_several_sets(self) -> None:
        root = response(
            dispatcher_set(1, dest("sip:a", "AP")),
            dispatcher_set(7, dest("sip:b", "IP"), dest("sip:c", "AX")),
        )

        targets = parse_dispatcher_targets(root)

        assert [(t.set_id, t.uri) for t in targets] == [
            (1, "sip:a"),
            (7, "sip:b"),
            (7, "sip:c"),
        ]

    def test_set_id_zero_is_valid(self) -> None:
        targets = parse_dispatcher_targets(response(dispatcher_set(0, dest("sip:a", "AP"))))

        assert targets == [DispatcherTarget(uri="sip:a", flags="AP", set_id=0)]

    def test_set_without_destinations_contributes_nothing(self) -> None:
        root = response(dispatcher_set(1), dispatcher_set(2, dest("sip:b", "AP")))

        assert [t.set_id for t in parse_dispatcher_targets(root)] == [2]

    def test_no_records_no_metric(self) -> None:
        assert DispatcherProjector().project(G("", (V("NRSETS", 0),))) == {}

    def test_missing_uri_and_flags_become_empty_labels(self) -> None:
        root = response(G("SET", (V("ID", 1), G("TARGETS", (G("DEST", ()),)))))

        [target] = parse_dispatcher_targets(root)

        assert target.uri == ""
        assert target.flags == ""


class TestDispatcherErrors:
    """Tests for structural failures."""

    def test_missing_set_id_raises(self) -> None:
        """
        SCENARIO: A SET carries destinations but no ID
        EXPECTED: MissingSetID; the whole method fails
        """
        root = response(dispatcher_set(None, dest("sip:a", "AP")))

        with pytest.raises(MissingSetID) as exc_info:
            DispatcherProjector().project(root)

        assert exc_info.value.method == "dispatcher.list"
        assert "missing set ID" in str(exc_info.value)

    def test_text_set_id_raises(self) -> None:
        root = response(dispatcher_set("2", dest("sip:a", "AP")))

        with pytest.raises(FieldDecodeError):
            parse_dispatcher_targets(root)

    def test_set_that_is_not_a_group_raises(self) -> None:
        root = G("", (G("RECORDS", (V("SET", 1),)),))

        with pytest.raises(FieldDecodeError):
            parse_dispatcher_targets(root)
