"""
Comprehensive test suite for Orders module
Tests: Subtotals, Inventory Matching, Draft Workflow, Submission, Lifecycle, Order Views
"""
from decimal import Decimal
from unittest import mock

from django.test import SimpleTestCase
from rest_framework import status

from warehouse.core.test_utils import TestDataFactory, AuthenticatedAPIClient, FakeApiClient
from warehouse.orders.domain import Order, OrderType, InventoryItem, compute_subtotal
from warehouse.orders.lifecycle import (
    InvalidTransition, order_state, convert_to_sales_payload, status_update_payload,
    can_mutate_order, allowed_actions,
)
from warehouse.orders.matching import match_inventory, available_quantity
from warehouse.orders.workflow import (
    OrderDraft, EditOrderDraft, OrderDraftError, OrderSubmission,
    SUBMIT_IN_PROGRESS_MESSAGE, INSUFFICIENT_INVENTORY_MESSAGE,
)


def stock(material, specification, quantity):
    return InventoryItem(material=material, specification=specification, quantity=Decimal(str(quantity)))


class FakeLookup:
    """Inventory lookup answering from a fixed snapshot"""

    def __init__(self, items, options=None, success=True):
        self.items = items
        self.options = options or []
        self.success = success

    def specifications(self, material):
        return list(self.options)

    def snapshot(self):
        if not self.success:
            return [], {'success': False, 'msg': 'Network error', 'status': 0}
        return self.items, {'success': True}

    def available(self, material, specification):
        return available_quantity(self.items, material, specification)


def filled_draft(order_type='SALES', quantity='15', material='201', specification='2mm'):
    draft = OrderDraft(order_type=order_type, customer_id=1)
    item = draft.items[0]
    item.material = material
    item.specification = specification
    item.quantity = quantity
    item.unit_price = '10'
    return draft


class SubtotalTests(SimpleTestCase):
    """Test line subtotal computation"""

    def test_quantity_times_price_without_weight(self):
        self.assertEqual(compute_subtotal('5', '0', '10.00'), Decimal('50.00'))
        self.assertEqual(compute_subtotal('5', '', '10.00'), Decimal('50.00'))

    def test_weight_wins_when_positive(self):
        self.assertEqual(compute_subtotal('5', '2.5', '10'), Decimal('25.00'))

    def test_missing_price(self):
        self.assertIsNone(compute_subtotal('5', '0', ''))

    def test_rounding(self):
        self.assertEqual(compute_subtotal('3', '0', '0.335'), Decimal('1.01'))

    def test_recomputed_after_field_change(self):
        draft = OrderDraft()
        draft.set_item_field(0, 'quantity', '4')
        draft.set_item_field(0, 'unit_price', '2.50')
        self.assertEqual(draft.items[0].subtotal, '10.00')
        draft.set_item_field(0, 'weight', '3')
        self.assertEqual(draft.items[0].subtotal, '7.50')
        draft.set_item_field(0, 'weight', '0')
        self.assertEqual(draft.items[0].subtotal, '10.00')
        self.assertEqual(draft.total_price, Decimal('10.00'))


class MatchingTests(SimpleTestCase):
    """Test the three-tier inventory match"""

    def test_case_variants_match(self):
        items = [stock('201', '2MM', 10)]
        self.assertEqual(match_inventory(items, '201', '2mm'), items[0])

    def test_padding_ignored(self):
        items = [stock('201', ' 2mm ', 10)]
        self.assertEqual(available_quantity(items, '201', '2mm'), Decimal('10'))

    def test_specification_containment(self):
        items = [stock('304', '1.0*1219*C', 7)]
        self.assertEqual(available_quantity(items, '304', '1.0*1219'), Decimal('7'))

    def test_exact_beats_containment(self):
        items = [stock('201', '2mm-wide', 3), stock('201', '2mm', 9)]
        self.assertEqual(available_quantity(items, '201', '2mm'), Decimal('9'))

    def test_other_material_never_matches(self):
        items = [stock('304', '2mm', 10)]
        self.assertIsNone(match_inventory(items, '201', '2mm'))
        self.assertEqual(available_quantity(items, '201', '2mm'), Decimal('0'))


class DraftTests(SimpleTestCase):
    """Test the order draft field rules and validation"""

    def test_material_change_resets_specification(self):
        draft = OrderDraft()
        lookup = FakeLookup([stock('201', '2mm', 10)], options=['2mm', '3mm'])
        draft.set_item_field(0, 'material', '201', lookup)
        draft.set_item_field(0, 'specification', '2mm', lookup)
        self.assertEqual(draft.items[0].available, '10')

        draft.set_item_field(0, 'material', '304', lookup)
        self.assertEqual(draft.items[0].specification, '')
        self.assertIsNone(draft.items[0].available)
        self.assertEqual(draft.items[0].specification_options, ['2mm', '3mm'])

    def test_unknown_unit(self):
        with self.assertRaises(OrderDraftError):
            OrderDraft().set_item_field(0, 'unit', 'ton')

    def test_last_item_cannot_be_removed(self):
        draft = OrderDraft()
        with self.assertRaises(OrderDraftError):
            draft.remove_item(0)
        draft.add_item()
        draft.remove_item(0)
        self.assertEqual(len(draft.items), 1)

    def test_validation_messages(self):
        draft = OrderDraft()
        errors = draft.validate()
        self.assertEqual(errors[0], 'Please select a customer')
        self.assertEqual(errors[1], 'Item 1: please fill in material, specification, quantity, unit_price')

    def test_customer_can_be_cleared(self):
        draft = OrderDraft(customer_id=3)
        draft.set_header(remark='urgent')
        self.assertEqual(draft.customer_id, 3)
        draft.set_header(customer_id=None)
        self.assertIsNone(draft.customer_id)

    def test_round_trip_through_session_dict(self):
        draft = filled_draft()
        restored = OrderDraft.from_dict(draft.to_dict())
        self.assertEqual(restored.to_payload(user_id=1), draft.to_payload(user_id=1))


class SufficiencyTests(SimpleTestCase):
    """Test shortfall detection"""

    def test_shortfall_entry(self):
        draft = filled_draft(quantity='10')
        shortfalls = draft.check_inventory_sufficiency([stock('201', '2mm', 5)])
        self.assertEqual(shortfalls[0].as_dict(), {
            'material': '201', 'specification': '2mm',
            'required': Decimal('10'), 'available': Decimal('5'), 'missing': Decimal('5'),
        })

    def test_unmatched_line_has_nothing_available(self):
        draft = filled_draft(quantity='8')
        shortfall = draft.check_inventory_sufficiency([])[0]
        self.assertEqual(shortfall.available, Decimal('0'))
        self.assertEqual(shortfall.missing, Decimal('8'))

    def test_quotes_are_not_checked(self):
        draft = filled_draft(order_type='QUOTE', quantity='1000')
        self.assertEqual(draft.check_inventory_sufficiency([]), [])


class SubmissionTests(SimpleTestCase):
    """Test the submit sequence"""

    def setUp(self):
        self.client = FakeApiClient({('POST', '/orders'): {'success': True, 'orderId': 9, 'order_number': 'ORD000009'}})

    def test_blocked_without_customer(self):
        draft = filled_draft(order_type='QUOTE')
        draft.customer_id = None
        result = OrderSubmission(self.client, draft, lookup=FakeLookup([])).submit(confirm=True)
        self.assertFalse(result['success'])
        self.assertEqual(result['stage'], 'validation')
        self.assertEqual(self.client.calls, [])

    def test_blocked_with_empty_field(self):
        draft = filled_draft(order_type='QUOTE')
        draft.items[0].unit_price = ''
        result = OrderSubmission(self.client, draft, lookup=FakeLookup([])).submit(confirm=True)
        self.assertEqual(result['msg'], 'Item 1: please fill in unit_price')
        self.assertEqual(self.client.calls, [])

    def test_insufficient_inventory_scenario(self):
        draft = filled_draft(quantity='15')
        result = OrderSubmission(self.client, draft, lookup=FakeLookup([stock('201', '2mm', 10)])).submit(confirm=True)
        self.assertFalse(result['success'])
        self.assertEqual(result['msg'], INSUFFICIENT_INVENTORY_MESSAGE)
        self.assertEqual(result['shortfalls'][0]['missing'], Decimal('5'))
        self.assertEqual(self.client.calls, [])

    def test_inventory_fetch_failure_blocks(self):
        draft = filled_draft(quantity='1')
        result = OrderSubmission(self.client, draft, lookup=FakeLookup([], success=False)).submit(confirm=True)
        self.assertFalse(result['success'])
        self.assertEqual(result['stage'], 'inventory')
        self.assertEqual(self.client.calls, [])

    def test_confirmation_required_before_post(self):
        draft = filled_draft(quantity='5')
        result = OrderSubmission(self.client, draft, lookup=FakeLookup([stock('201', '2MM', 10)])).submit()
        self.assertTrue(result['confirm_required'])
        self.assertIn('reduce the corresponding inventory', result['msg'])
        self.assertEqual(self.client.calls, [])

    def test_confirmed_submission(self):
        draft = filled_draft(quantity='5')
        persisted = []
        submission = OrderSubmission(
            self.client, draft, user_id=3,
            persist=lambda d: persisted.append(d.submitting),
            lookup=FakeLookup([stock('201', '2MM', 10)]),
        )
        result = submission.submit(confirm=True)
        self.assertTrue(result['success'])
        self.assertEqual(result['order_number'], 'ORD000009')
        self.assertEqual(persisted, [True, False])
        payload = self.client.calls_to('POST', '/orders')[0][3]
        self.assertEqual(payload['user_id'], 3)
        self.assertEqual(payload['order_type'], 'SALES')
        self.assertFalse(draft.submitting)

    def test_second_submit_while_in_progress(self):
        draft = filled_draft(order_type='QUOTE')
        draft.submitting = True
        result = OrderSubmission(self.client, draft, lookup=FakeLookup([])).submit(confirm=True)
        self.assertEqual(result['msg'], SUBMIT_IN_PROGRESS_MESSAGE)
        self.assertEqual(self.client.calls, [])

    def test_server_failure_message_kept(self):
        client = FakeApiClient({('POST', '/orders'): {'success': False, 'msg': 'Customer does not exist'}})
        result = OrderSubmission(client, filled_draft(order_type='QUOTE'), lookup=FakeLookup([])).submit(confirm=True)
        self.assertEqual(result['msg'], 'Customer does not exist')
        self.assertEqual(result['stage'], 'submit')


class EditDraftTests(SimpleTestCase):
    """Test editing of existing orders"""

    def order(self, order_type='SALES', quantity=10):
        data = TestDataFactory.order(order_type=order_type, items=[
            TestDataFactory.order_item(item_id=11, material='201', specification='2mm', quantity=quantity),
        ])
        return Order.from_api(data)

    def test_sales_edit_checks_only_increase(self):
        draft = EditOrderDraft.from_order(self.order())
        draft.set_item_field(0, 'quantity', '12')
        self.assertEqual(draft.check_inventory_sufficiency([stock('201', '2mm', 3)]), [])
        draft.set_item_field(0, 'quantity', '15')
        shortfall = draft.check_inventory_sufficiency([stock('201', '2mm', 3)])[0]
        self.assertEqual(shortfall.required, Decimal('5'))

    def test_quote_edit_not_checked(self):
        draft = EditOrderDraft.from_order(self.order(order_type='QUOTE'))
        draft.set_item_field(0, 'quantity', '500')
        self.assertEqual(draft.check_inventory_sufficiency([]), [])

    def test_order_type_fixed(self):
        draft = EditOrderDraft.from_order(self.order())
        with self.assertRaises(OrderDraftError):
            draft.set_header(order_type='QUOTE')

    def test_payload_keeps_item_ids(self):
        draft = EditOrderDraft.from_order(self.order())
        payload = draft.to_payload()
        self.assertEqual(payload['customerId'], 1)
        self.assertEqual(payload['items'][0]['id'], 11)
        self.assertEqual(payload['items'][0]['subtotal'], '100.00')

    def test_session_round_trip(self):
        draft = EditOrderDraft.from_order(self.order())
        restored = EditOrderDraft.from_dict(draft.to_dict())
        self.assertEqual(restored.original_quantities, {'11': '10'})
        self.assertTrue(restored.needs_stock_check)


class LifecycleTests(SimpleTestCase):
    """Test order state transitions"""

    def test_convert_resets_flags(self):
        order = Order.from_api(TestDataFactory.order(order_type='QUOTE', is_paid=True, is_completed=True))
        self.assertEqual(convert_to_sales_payload(order), {'order_type': 'SALES', 'is_paid': 0, 'is_completed': 0})

    def test_convert_is_one_way(self):
        order = Order.from_api(TestDataFactory.order(order_type='SALES'))
        with self.assertRaises(InvalidTransition):
            convert_to_sales_payload(order)

    def test_status_update_only_for_sales(self):
        order = Order.from_api(TestDataFactory.order(order_type='QUOTE'))
        with self.assertRaises(InvalidTransition):
            status_update_payload(order, is_paid=True)

    def test_status_update_keeps_other_flag(self):
        order = Order.from_api(TestDataFactory.order(order_type='SALES', is_completed=True))
        self.assertEqual(status_update_payload(order, is_paid=True), {'is_paid': 1, 'is_completed': 1, 'remark': ''})

    def test_order_state(self):
        self.assertEqual(order_state(Order.from_api(TestDataFactory.order())), 'QUOTE')
        sales = Order.from_api(TestDataFactory.order(order_type='SALES', is_paid=1))
        self.assertEqual(order_state(sales), 'SALES(paid, pending)')
        self.assertEqual(sales.order_type, OrderType.SALES)

    def test_ownership(self):
        order = Order.from_api(TestDataFactory.order(user_id=5))
        owner = mock.Mock(id=5, role='employee')
        other = mock.Mock(id=6, role='employee')
        boss = mock.Mock(id=6, role='boss')
        self.assertTrue(can_mutate_order(owner, order))
        self.assertFalse(can_mutate_order(other, order))
        self.assertTrue(can_mutate_order(boss, order))
        self.assertEqual(allowed_actions(other, order), ['pdf'])
        self.assertEqual(allowed_actions(boss, order), ['convert', 'edit', 'delete', 'pdf'])


class OrderViewTests(SimpleTestCase):
    """Test order pages against a fake remote API"""

    def setUp(self):
        self.api = FakeApiClient()
        patcher = mock.patch('warehouse.orders.views.get_api_client', return_value=self.api)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(TestDataFactory.user(user_id=1, username='emma', role='employee'))

    def login_as(self, role, user_id=2):
        self.client.authenticate_user(TestDataFactory.user(user_id=user_id, role=role))

    def test_order_list_filters(self):
        self.api.add('GET', '/orders', {'success': True, 'orders': [
            TestDataFactory.order(order_id=1, order_type='SALES'),
            TestDataFactory.order(order_id=22, order_type='SALES'),
        ]})
        response = self.client.get('/orders/', {'type': 'SALES', 'paid': 'false', 'order_number': '22'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['state'], 'SALES(unpaid, pending)')
        params = self.api.calls_to('GET', '/orders')[0][2]
        self.assertEqual(params, {'order_type': 'SALES', 'is_paid': 'false'})

    def test_order_list_network_failure(self):
        self.api.add('GET', '/orders', {'success': False, 'msg': 'Network error', 'status': 0, 'orders': []})
        response = self.client.get('/orders/')
        self.assertEqual(response.status_code, status.HTTP_502_BAD_GATEWAY)

    def test_order_detail(self):
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, user_id=1)})
        response = self.client.get('/orders/1/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['state'], 'QUOTE')
        self.assertEqual(response.data['total_price'], Decimal('50.00'))
        self.assertIn('convert', response.data['actions'])

    def test_convert_needs_confirmation(self):
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, user_id=1)})
        self.api.add('PUT', '/orders/1', {'success': True})
        response = self.client.post('/orders/1/convert/')
        self.assertTrue(response.data['confirm_required'])
        self.assertEqual(self.api.calls_to('PUT', '/orders/1'), [])

        response = self.client.post('/orders/1/convert/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        payload = self.api.calls_to('PUT', '/orders/1')[0][3]
        self.assertEqual(payload, {'order_type': 'SALES', 'is_paid': 0, 'is_completed': 0})

    def test_convert_someone_elses_order(self):
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, user_id=99)})
        response = self.client.post('/orders/1/convert/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_status_update(self):
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, order_type='SALES', user_id=1)})
        self.api.add('PUT', '/orders/1', {'success': True})
        response = self.client.put('/orders/1/', {'is_paid': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.api.calls_to('PUT', '/orders/1')[0][3], {'is_paid': 1, 'is_completed': 0, 'remark': ''})

    def test_employee_cannot_delete(self):
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, user_id=1)})
        response = self.client.delete('/orders/1/?confirm=true')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_boss_deletes_after_confirmation(self):
        self.login_as('boss')
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, user_id=1)})
        self.api.add('DELETE', '/orders/1', {'success': True, 'msg': 'Order deleted'})
        response = self.client.delete('/orders/1/')
        self.assertTrue(response.data['confirm_required'])
        self.assertEqual(self.api.calls_to('DELETE', '/orders/1'), [])
        response = self.client.delete('/orders/1/?confirm=true')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['redirect'], '/orders/')

    def test_cookie_session_needs_csrf_token(self):
        browser = AuthenticatedAPIClient(enforce_csrf_checks=True)
        browser.authenticate_user(TestDataFactory.user(user_id=2, role='boss'))
        self.api.add('GET', '/orders/1', {'success': True, 'order': TestDataFactory.order(order_id=1, user_id=1)})
        self.api.add('DELETE', '/orders/1', {'success': True, 'msg': 'Order deleted'})

        response = browser.delete('/orders/1/?confirm=true')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        response = browser.post('/orders/1/convert/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.api.calls, [])

        csrf_token = browser.get('/login/').data['csrf_token']
        response = browser.delete('/orders/1/?confirm=true', HTTP_X_CSRFTOKEN=csrf_token)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(self.api.calls_to('DELETE', '/orders/1')), 1)

    def test_create_sales_order_blocked_by_shortfall(self):
        self.api.add('GET', '/customers', {'success': True, 'customers': [TestDataFactory.customer(customer_id=1)]})
        self.api.add('GET', '/inventory/materials', {'success': True, 'materials': ['201', '304']})
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(material='201', specification='2MM', quantity=10),
        ]})

        response = self.client.get('/orders/new/')
        self.assertEqual(response.data['materials'], ['201', '304'])
        self.client.patch('/orders/new/', {'order_type': 'SALES', 'customer_id': 1})
        self.client.patch('/orders/new/items/0/', {'field': 'material', 'value': '201'})
        response = self.client.patch('/orders/new/items/0/', {'field': 'specification', 'value': '2mm'})
        self.assertEqual(response.data['draft']['items'][0]['available'], '10')
        self.client.patch('/orders/new/items/0/', {'field': 'quantity', 'value': '15'})
        self.client.patch('/orders/new/items/0/', {'field': 'unit_price', 'value': '3'})

        response = self.client.post('/orders/new/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['shortfalls'][0]['missing'], Decimal('5'))
        self.assertEqual(self.api.calls_to('POST', '/orders'), [])

    def test_clear_selected_customer(self):
        self.client.patch('/orders/new/', {'customer_id': 4})
        response = self.client.patch('/orders/new/', {'customer_id': None})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['draft']['customer_id'])

    def test_create_quote_order(self):
        self.api.add('GET', '/inventory', {'success': True, 'inventory': []})
        self.api.add('POST', '/orders', {'success': True, 'orderId': 9, 'order_number': 'ORD000009'})
        self.client.patch('/orders/new/', {'customer_id': 1})
        for field, value in (('material', '201'), ('specification', '2mm'), ('quantity', '3'), ('unit_price', '2')):
            self.client.patch('/orders/new/items/0/', {'field': field, 'value': value})

        response = self.client.post('/orders/new/')
        self.assertTrue(response.data['confirm_required'])
        response = self.client.post('/orders/new/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['redirect'], '/orders/')
        payload = self.api.calls_to('POST', '/orders')[0][3]
        self.assertEqual(payload['user_id'], 1)
        self.assertEqual(payload['items'][0]['quantity'], '3')

        # the draft is discarded after a successful submit
        self.assertNotIn('order_draft', self.client.session)

    def test_create_without_customer_makes_no_call(self):
        response = self.client.post('/orders/new/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['msg'], 'Please select a customer')
        self.assertEqual(self.api.calls, [])

    def test_items_add_and_remove(self):
        response = self.client.post('/orders/new/items/')
        self.assertEqual(len(response.data['draft']['items']), 2)
        response = self.client.delete('/orders/new/items/1/')
        self.assertEqual(len(response.data['draft']['items']), 1)
        response = self.client.delete('/orders/new/items/0/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_edit_requires_admin_role(self):
        response = self.client.get('/orders/1/edit/')
        self.assertEqual(response.status_code, status.HTTP_302_FOUND)
        self.assertEqual(response['Location'], '/403/')

    def test_boss_edits_sales_order(self):
        self.login_as('boss')
        order = TestDataFactory.order(order_id=1, order_type='SALES', items=[
            TestDataFactory.order_item(item_id=11, material='201', specification='2mm', quantity=10),
        ])
        self.api.add('GET', '/orders/1', {'success': True, 'order': order})
        self.api.add('GET', '/customers', {'success': True, 'customers': []})
        self.api.add('GET', '/inventory/materials', {'success': True, 'materials': []})
        self.api.add('GET', '/inventory', {'success': True, 'inventory': [
            TestDataFactory.inventory_item(material='201', specification='2mm', quantity=3),
        ]})
        self.api.add('PUT', '/orders/1/edit', {'success': True})

        response = self.client.get('/orders/1/edit/')
        self.assertEqual(response.data['draft']['order_number'], 'ORD000001')
        self.client.patch('/orders/1/edit/items/0/', {'field': 'quantity', 'value': '12'})
        response = self.client.post('/orders/1/edit/', {'confirm': True})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['redirect'], '/orders/1/')
        payload = self.api.calls_to('PUT', '/orders/1/edit')[0][3]
        self.assertEqual(payload['items'][0]['quantity'], '12')

    def test_pdf_download(self):
        self.api.add('DOWNLOAD', '/orders/1/pdf', (b'%PDF-1.4', 'application/pdf'))
        response = self.client.get('/orders/1/pdf/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertIn('order_1.pdf', response['Content-Disposition'])
