"""Pin SelectionStateMachine: toggle rules, phases, notifier, reset, purity."""

import pytest

from apps.storefront.selection import (
    MatchStatus,
    Rejection,
    SelectionPhase,
    SelectionStateMachine,
    ValueDescriptor,
)
from tests.factories import make_variant


class TestToggle:
    def test_first_toggle_moves_to_partial(self, machine):
        payload = machine.toggle('color', 'Black')
        assert payload.accepted is True
        assert payload.selection == {'color': 'Black'}
        assert payload.phase is SelectionPhase.PARTIAL
        assert machine.phase is SelectionPhase.PARTIAL

    def test_scenario_color_then_sizes(self, machine):
        payload = machine.toggle('color', 'Black')
        small = payload.option('size', 'S')
        medium = payload.option('size', 'M')
        assert small.is_available and small.available_stock == 5
        assert not medium.is_available
        assert list(medium.reasons) == ['out of stock']

    def test_scenario_size_first(self, machine):
        payload = machine.toggle('size', 'M')
        black = payload.option('color', 'Black')
        white = payload.option('color', 'White')
        assert not black.is_available
        assert list(black.reasons) == ['out of stock']
        assert not white.is_available
        assert list(white.reasons) == [
            'not available in this combination',
            'not available with M size',
        ]

    def test_complete_selection_resolves_variant(self, machine):
        machine.toggle('color', 'Black')
        payload = machine.toggle('size', 'S')
        assert payload.phase is SelectionPhase.COMPLETE
        assert payload.match_status is MatchStatus.MATCHED
        assert payload.matched_variant.sku == 'TS-BLK-S'
        assert payload.missing_attributes == ()

    def test_changing_a_chosen_attribute(self, machine):
        machine.toggle('color', 'Black')
        machine.toggle('size', 'S')
        payload = machine.toggle('color', 'White')
        assert payload.accepted
        assert payload.selection == {'color': 'White', 'size': 'S'}
        assert payload.matched_variant.sku == 'TS-WHT-S'

    def test_accepts_descriptor_objects(self, machine):
        payload = machine.toggle('size', ValueDescriptor('size', 'S'))
        assert payload.accepted
        assert payload.selection == {'size': 'S'}

    def test_descriptor_of_another_attribute_is_rejected(self, machine):
        payload = machine.toggle('size', ValueDescriptor('color', 'S'))
        assert payload.rejection is Rejection.UNKNOWN_VALUE
        assert machine.selection == {}


class TestRejections:
    def test_unknown_attribute(self, machine):
        payload = machine.toggle('material', 'Cotton')
        assert payload.accepted is False
        assert payload.rejection is Rejection.UNKNOWN_ATTRIBUTE
        assert machine.selection == {}

    def test_unknown_value(self, machine):
        payload = machine.toggle('size', 'XL')
        assert payload.rejection is Rejection.UNKNOWN_VALUE
        assert machine.selection == {}

    def test_unavailable_value_is_rejected_again(self, machine):
        machine.toggle('color', 'Black')
        payload = machine.toggle('size', 'M')
        assert payload.accepted is False
        assert payload.rejection is Rejection.UNAVAILABLE_VALUE
        assert machine.selection == {'color': 'Black'}

    def test_sold_out_value_rejected_on_empty_selection(self):
        machine = SelectionStateMachine()
        machine.initialize([
            make_variant(1, 'A', 0, color='Black'),
            make_variant(2, 'B', 2, color='White'),
        ])
        assert machine.toggle('color', 'Black').rejection is Rejection.UNAVAILABLE_VALUE
        assert machine.toggle('color', 'White').accepted

    def test_rejected_payload_still_describes_current_state(self, machine):
        machine.toggle('color', 'Black')
        payload = machine.toggle('size', 'M')
        assert payload.selection == {'color': 'Black'}
        assert payload.missing_attributes == ('size',)

    def test_toggle_before_initialize_is_rejected(self):
        payload = SelectionStateMachine().toggle('color', 'Black')
        assert payload.rejection is Rejection.UNKNOWN_ATTRIBUTE
        assert payload.phase is SelectionPhase.INITIAL


class TestIdempotence:
    def test_reclick_leaves_selection_object_untouched(self, machine):
        machine.toggle('color', 'Black')
        before = machine.selection
        snapshot = dict(before)
        payload = machine.toggle('color', 'Black')
        assert payload.rejection is Rejection.ALREADY_SELECTED
        assert machine.selection is before
        assert machine.selection == snapshot

    def test_reclick_does_not_renotify_image(self, swatch_variants, image_notifier):
        machine = SelectionStateMachine(on_image_change=image_notifier)
        machine.initialize(swatch_variants)
        machine.toggle('color', 'Black')
        machine.toggle('color', 'Black')
        image_notifier.assert_called_once_with('img/black.jpg')


class TestImageNotifier:
    def test_notified_with_selected_image(self, swatch_variants, image_notifier):
        machine = SelectionStateMachine(on_image_change=image_notifier)
        machine.initialize(swatch_variants)
        machine.toggle('color', 'Red')
        image_notifier.assert_called_once_with('img/red.jpg')

    def test_values_without_image_do_not_notify(self, machine, image_notifier):
        machine.toggle('color', 'Black')
        image_notifier.assert_not_called()

    def test_rejected_toggle_does_not_notify(self, swatch_variants, image_notifier):
        machine = SelectionStateMachine(on_image_change=image_notifier)
        machine.initialize(swatch_variants)
        machine.toggle('size', 'L')
        image_notifier.reset_mock()
        payload = machine.toggle('color', 'Red')
        assert payload.rejection is Rejection.UNAVAILABLE_VALUE
        image_notifier.assert_not_called()


class TestDeselectAndReset:
    def test_deselect_drops_one_attribute(self, machine):
        machine.toggle('color', 'Black')
        machine.toggle('size', 'S')
        payload = machine.deselect('size')
        assert payload.accepted
        assert payload.selection == {'color': 'Black'}
        assert payload.phase is SelectionPhase.PARTIAL
        assert payload.matched_variant is None

    def test_deselect_unselected_attribute(self, machine):
        payload = machine.deselect('size')
        assert payload.rejection is Rejection.NOT_SELECTED

    def test_deselect_unknown_attribute(self, machine):
        assert machine.deselect('material').rejection is Rejection.UNKNOWN_ATTRIBUTE

    def test_reset_returns_to_initial(self, machine):
        machine.toggle('color', 'Black')
        machine.toggle('size', 'S')
        payload = machine.reset()
        assert payload.selection == {}
        assert payload.missing_attributes == ('color', 'size')
        assert payload.phase is SelectionPhase.INITIAL
        assert machine.selection == {}


class TestLifecycle:
    def test_initialize_returns_attribute_groups(self, shirt_variants):
        groups = SelectionStateMachine().initialize(shirt_variants)
        assert list(groups) == ['color', 'size']

    def test_initialize_discards_previous_product(self, machine):
        machine.toggle('color', 'Black')
        machine.initialize([make_variant(9, 'MUG', 4, capacity='300ml')])
        assert machine.selection == {}
        assert machine.catalog.attributes == ['capacity']
        assert machine.toggle('color', 'Black').rejection is Rejection.UNKNOWN_ATTRIBUTE


class TestPurity:
    def test_identical_inputs_identical_results(self, shirt_variants):
        def run():
            machine = SelectionStateMachine()
            machine.initialize(shirt_variants)
            machine.toggle('size', 'S')
            return machine.toggle('color', 'White').to_dict()

        assert run() == run()

    def test_payload_is_cached_by_fingerprint(self, machine):
        first = machine.toggle('color', 'Black')
        assert machine.payload() is first

    def test_fingerprint_tracks_selection(self, machine):
        empty = machine.fingerprint()
        machine.toggle('color', 'Black')
        assert machine.fingerprint() != empty
        machine.reset()
        assert machine.fingerprint() == empty

    def test_cached_payload_cannot_be_edited(self, machine):
        first = machine.toggle('color', 'Black')
        with pytest.raises(TypeError):
            first.selection['size'] = 'S'
        with pytest.raises(TypeError):
            first.per_value_availability['size'] = ()

        machine.toggle('color', 'White')
        again = machine.toggle('color', 'Black')
        assert again.selection == {'color': 'Black'}
        assert [o.value for o in again.per_value_availability['size']] == ['S', 'M']

    def test_payload_does_not_follow_later_toggles(self, machine):
        first = machine.toggle('color', 'Black')
        machine.toggle('size', 'S')
        assert first.selection == {'color': 'Black'}

    def test_rejected_payload_is_read_only(self, machine):
        payload = machine.toggle('material', 'Cotton')
        with pytest.raises(TypeError):
            payload.selection['color'] = 'Black'
        assert machine.payload().selection == {}
