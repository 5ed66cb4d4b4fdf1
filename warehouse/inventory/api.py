"""Inventory endpoints of the remote API"""
from warehouse.core.errors import call_api


def fetch_inventory(client, material=None, specification=None, low_stock=False):
    """GET /inventory, optionally filtered by material / specification / low stock"""
    params = {
        'material': material or None,
        'spec': specification or None,
        'lowStock': 'true' if low_stock else None,
    }
    return call_api(
        'fetching inventory', 'Failed to fetch inventory',
        client.get, '/inventory', params, inventory=[],
    )


def fetch_materials(client):
    return call_api(
        'fetching materials', 'Failed to fetch materials',
        client.get, '/inventory/materials', None, materials=[],
    )


def add_inventory_item(client, material, specification, quantity, density=None):
    payload = {
        'material': material,
        'specification': specification,
        'quantity': quantity,
        'density': density,
    }
    return call_api('adding inventory item', 'Failed to add inventory item', client.post, '/inventory', payload)


def update_inventory_item(client, item_id, quantity, density=None):
    payload = {'quantity': quantity, 'density': density}
    return call_api(
        'updating inventory item', 'Failed to update inventory item',
        client.put, f'/inventory/{item_id}', payload,
    )


def delete_inventory_item(client, item_id):
    return call_api(
        'deleting inventory item', 'Failed to delete inventory item',
        client.delete, f'/inventory/{item_id}',
    )


def import_inventory(client, rows):
    """POST the whole parsed batch; the server validates each row"""
    return call_api(
        'importing inventory', 'Failed to import inventory',
        client.post, '/inventory/import', {'inventory': rows},
    )


def export_inventory(client):
    def _download():
        content, content_type = client.download('/inventory/export')
        return {'success': True, 'content': content, 'content_type': content_type}

    return call_api('exporting inventory', 'Export failed', _download)


def inventory_rows(result):
    """Rows of an inventory listing regardless of the envelope key used"""
    if not result.get('success'):
        return []
    return result.get('inventory') or result.get('data') or []


def specification_options(rows):
    """Distinct specifications in listing order"""
    options = []
    for row in rows:
        spec = row.get('specification')
        if spec and spec not in options:
            options.append(spec)
    return options
