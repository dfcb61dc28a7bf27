from stackdock.managers import selectors
from stackdock.models.files import Snapshot


def test_cards_for_stack_is_exact(sample_snapshot):
    assert [c.id for c in selectors.cards_for_stack(sample_snapshot, "S1")] == ["C1", "C2"]
    assert [c.id for c in selectors.cards_for_stack(sample_snapshot, "S2")] == ["C3"]
    assert selectors.cards_for_stack(sample_snapshot, "missing") == []


def test_cards_for_stack_partitions_all_cards(sample_snapshot):
    seen = []
    for stack in sample_snapshot.stacks:
        seen.extend(c.id for c in selectors.cards_for_stack(sample_snapshot, stack.id))
    assert sorted(seen) == sorted(c.id for c in sample_snapshot.cards)


def test_card_count(sample_snapshot):
    assert selectors.card_count(sample_snapshot, "S1") == 2
    assert selectors.card_count(sample_snapshot, "missing") == 0


def test_card_counts_includes_empty_stacks(builder, sample_snapshot):
    snapshot = Snapshot(
        stacks=sample_snapshot.stacks + (builder.create_stack("Empty", id="S3"),),
        cards=sample_snapshot.cards,
    )
    assert selectors.card_counts(snapshot) == {"S1": 2, "S2": 1, "S3": 0}


def test_dangling_cards(builder, sample_snapshot):
    assert selectors.dangling_cards(sample_snapshot) == []
    stray = builder.create_card("Stray", stack_id="gone", id="C9")
    snapshot = Snapshot(stacks=sample_snapshot.stacks, cards=sample_snapshot.cards + (stray,))
    assert selectors.dangling_cards(snapshot) == [stray]
