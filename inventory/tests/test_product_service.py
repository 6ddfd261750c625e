"""Tests for products and the product <-> barcode association."""

from datetime import date
from decimal import Decimal

import pytest

from ..entities import Barcode, BarcodeType, Product
from ..errors import (
    BarcodeAlreadyAssignedError,
    BarcodeMismatchError,
    DuplicateBarcodeError,
    InvalidEntityError,
    NotFoundError,
)
from .conftest import raw_barcode_row, raw_product_fk

def test_create_with_new_barcode_stores_fk(product_service, barcode_service, session_manager, make_product, make_barcode):
    product = make_product(barcode=make_barcode('CB000001'))

    product_service.create(product)

    assert product.id > 0
    assert product.barcode.id > 0
    assert product.barcode_id == product.barcode.id
    assert raw_product_fk(session_manager, product.id) == product.barcode.id
    stored = product_service.get_by_id(product.id)
    assert stored.barcode.value == 'CB000001'
    assert stored.barcode_id == stored.barcode.id
    assert barcode_service.get_by_id(product.barcode.id) is not None

def test_create_without_barcode(product_service, session_manager, make_product):
    product = product_service.create(make_product())

    assert raw_product_fk(session_manager, product.id) is None
    stored = product_service.get_by_id(product.id)
    assert stored.barcode is None
    assert stored.barcode_id is None
    assert stored.price == Decimal('100.50')
    assert stored.weight == Decimal('12.5')

def test_create_coerces_text_numbers(product_service):
    product = product_service.create(Product(name='silla', brand='Fabrica', category='usado', price='15.25'))
    stored = product_service.get_by_id(product.id)
    assert stored.price == Decimal('15.25')
    assert stored.weight is None

@pytest.mark.parametrize('overrides, message', [
    ({'name': '  '}, 'name cannot be empty'),
    ({'brand': ''}, 'brand cannot be empty'),
    ({'category': None}, 'category cannot be empty'),
    ({'price': '0'}, 'price must be greater than 0'),
    ({'price': None}, 'price must be greater than 0'),
    ({'weight': '-1'}, 'weight must be greater than 0'),
    ({'price': '0.001'}, 'Price cannot have more than 2 decimal places'),
    ({'price': '10.005'}, 'Price cannot have more than 2 decimal places'),
    ({'price': '123456789'}, 'Price cannot have more than 8 integer digits'),
    ({'price': 'NaN'}, 'Price must be a finite number'),
    ({'price': 'Infinity'}, 'Price must be a finite number'),
    ({'weight': '0.0005'}, 'Weight cannot have more than 3 decimal places'),
    ({'weight': '-Infinity'}, 'Weight must be a finite number'),
    ({'weight': '12345678'}, 'Weight cannot have more than 7 integer digits'),
    ({'name': 'm' * 121}, 'name cannot exceed 120 characters'),
    ({'brand': 'b' * 81}, 'brand cannot exceed 80 characters'),
    ({'category': 'c' * 81}, 'category cannot exceed 80 characters'),
])
def test_create_rejects_invalid_products(product_service, barcode_service, make_product, make_barcode, overrides, message):
    product = make_product(barcode=make_barcode())
    for field, value in overrides.items():
        setattr(product, field, value)

    with pytest.raises(InvalidEntityError, match=message):
        product_service.create(product)
    assert product_service.get_all() == []
    assert barcode_service.get_all() == []

def test_create_rejects_non_numeric_price(product_service, make_product):
    product = make_product()
    product.price = 'cheap'
    with pytest.raises(InvalidEntityError, match='Price must be a number'):
        product_service.create(product)

def test_create_accepts_values_at_column_scale(product_service, make_product):
    product = make_product(price='99999999.99', weight='1.250')

    product_service.create(product)

    stored = product_service.get_by_id(product.id)
    assert stored.price == Decimal('99999999.99')
    assert stored.weight == Decimal('1.25')

def test_create_with_bare_barcode_id(product_service, barcode_service, make_product, make_barcode):
    barcode = barcode_service.create(make_barcode())
    product = make_product()
    product.barcode_id = barcode.id

    with pytest.raises(InvalidEntityError, match='Attach barcode'):
        product_service.create(product)
    assert product_service.get_all() == []

def test_create_is_atomic(product_service, barcode_service, make_product, make_barcode, monkeypatch):
    def fail_insert(session, product):
        raise RuntimeError('insert failed')
    monkeypatch.setattr(product_service.dao, 'insert', fail_insert)

    with pytest.raises(RuntimeError):
        product_service.create(make_product(barcode=make_barcode()))
    assert barcode_service.get_all() == []

def test_create_with_duplicate_barcode_value(product_service, product_with_barcode, make_product, make_barcode):
    with pytest.raises(DuplicateBarcodeError):
        product_service.create(make_product(name='silla', barcode=make_barcode(product_with_barcode.barcode.value)))
    assert len(product_service.get_all()) == 1

def test_create_with_existing_unassigned_barcode(product_service, barcode_service, session_manager, make_product, make_barcode):
    barcode = barcode_service.create(make_barcode('CB000005'))

    product = product_service.create(make_product(barcode=barcode))

    assert raw_product_fk(session_manager, product.id) == barcode.id
    assert len(barcode_service.get_all()) == 1

def test_create_with_barcode_owned_by_another_product(product_service, product_with_barcode, make_product):
    with pytest.raises(BarcodeAlreadyAssignedError):
        product_service.create(make_product(name='silla', barcode=product_with_barcode.barcode))
    assert len(product_service.get_all()) == 1

def test_delete_product_keeps_barcode(product_service, barcode_service, session_manager, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id

    product_service.delete(product_with_barcode.id)

    assert product_service.get_by_id(product_with_barcode.id) is None
    assert product_service.get_all() == []
    assert barcode_service.get_by_id(barcode_id) is not None
    assert not raw_barcode_row(session_manager, barcode_id).eliminado
    # The eliminated product still holds the reference
    assert raw_product_fk(session_manager, product_with_barcode.id) == barcode_id

def test_barcode_of_eliminated_product_stays_assigned(product_service, product_with_barcode, make_product):
    barcode = product_with_barcode.barcode
    product_service.delete(product_with_barcode.id)

    with pytest.raises(BarcodeAlreadyAssignedError):
        product_service.create(make_product(name='silla', barcode=barcode))

def test_delete_missing_product(product_service):
    with pytest.raises(NotFoundError):
        product_service.delete(99)

def test_unsafe_barcode_delete_leaves_dangling_reference(product_service, barcode_service, session_manager, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id

    barcode_service.delete(barcode_id)

    stored = product_service.get_by_id(product_with_barcode.id)
    assert stored.barcode is None
    assert stored.barcode_id == barcode_id
    assert stored.has_dangling_barcode
    assert raw_product_fk(session_manager, stored.id) == barcode_id
    assert [p.id for p in product_service.find_dangling()] == [stored.id]

def test_update_keeps_dangling_reference(product_service, barcode_service, session_manager, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id
    barcode_service.delete(barcode_id)
    product = product_service.get_by_id(product_with_barcode.id)
    product.name = 'renamed'

    product_service.update(product)

    assert raw_product_fk(session_manager, product.id) == barcode_id
    stored = product_service.get_by_id(product.id)
    assert stored.name == 'renamed'
    assert stored.has_dangling_barcode
    assert [p.id for p in product_service.find_dangling()] == [product.id]

def test_update_rejects_bare_barcode_id(product_service, barcode_service, session_manager, make_product, make_barcode):
    product = product_service.create(make_product())
    barcode = barcode_service.create(make_barcode())
    product.barcode_id = barcode.id

    with pytest.raises(InvalidEntityError, match='without attaching it'):
        product_service.update(product)
    assert raw_product_fk(session_manager, product.id) is None

def test_remove_barcode_clears_reference_first(product_service, barcode_service, session_manager, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id

    product_service.remove_barcode(product_with_barcode.id, barcode_id)

    assert raw_product_fk(session_manager, product_with_barcode.id) is None
    assert bool(raw_barcode_row(session_manager, barcode_id).eliminado)
    assert barcode_service.get_by_id(barcode_id) is None
    stored = product_service.get_by_id(product_with_barcode.id)
    assert stored.barcode is None
    assert not stored.has_dangling_barcode
    assert product_service.find_dangling() == []

def test_remove_barcode_mismatch(product_service, barcode_service, session_manager, product_with_barcode, make_barcode):
    other = barcode_service.create(make_barcode('CB000002'))

    with pytest.raises(BarcodeMismatchError):
        product_service.remove_barcode(product_with_barcode.id, other.id)
    assert raw_product_fk(session_manager, product_with_barcode.id) == product_with_barcode.barcode.id
    assert barcode_service.get_by_id(other.id) is not None
    assert barcode_service.get_by_id(product_with_barcode.barcode.id) is not None

def test_remove_barcode_from_product_without_one(product_service, barcode_service, make_product, make_barcode):
    product = product_service.create(make_product())
    barcode = barcode_service.create(make_barcode())

    with pytest.raises(BarcodeMismatchError):
        product_service.remove_barcode(product.id, barcode.id)

def test_remove_barcode_repairs_dangling_reference(product_service, barcode_service, session_manager, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id
    barcode_service.delete(barcode_id)

    product_service.remove_barcode(product_with_barcode.id, barcode_id)

    assert raw_product_fk(session_manager, product_with_barcode.id) is None
    assert product_service.find_dangling() == []

def test_remove_barcode_missing_product(product_service):
    with pytest.raises(NotFoundError):
        product_service.remove_barcode(7, 1)

@pytest.mark.parametrize('product_id, barcode_id', [(0, 1), (1, 0), (-3, 2)])
def test_remove_barcode_rejects_bad_ids(product_service, product_id, barcode_id):
    with pytest.raises(InvalidEntityError):
        product_service.remove_barcode(product_id, barcode_id)

def test_barcode_update_is_seen_by_product(product_service, barcode_service, product_with_barcode):
    barcode = barcode_service.get_by_id(product_with_barcode.barcode.id)
    barcode.value = 'CB000777'
    barcode.type = BarcodeType.UPC

    barcode_service.update(barcode)

    stored = product_service.get_by_id(product_with_barcode.id)
    assert stored.barcode.value == 'CB000777'
    assert stored.barcode.type == BarcodeType.UPC

def test_update_product_fields(product_service, product_with_barcode):
    product = product_service.get_by_id(product_with_barcode.id)
    product.name = 'mesa grande'
    product.price = '250'

    product_service.update(product)

    stored = product_service.get_by_id(product.id)
    assert stored.name == 'mesa grande'
    assert stored.price == Decimal('250')
    assert stored.barcode_id == product_with_barcode.barcode.id

def test_update_edits_owned_barcode(product_service, barcode_service, product_with_barcode):
    product = product_service.get_by_id(product_with_barcode.id)
    product.barcode.value = 'CB000050'

    product_service.update(product)

    assert product_service.get_by_id(product.id).barcode.value == 'CB000050'
    assert len(barcode_service.get_all()) == 1

def test_update_adds_barcode_to_product_without_one(product_service, session_manager, make_product, make_barcode):
    product = product_service.create(make_product())
    product.attach(make_barcode('CB000010'))

    product_service.update(product)

    assert product.barcode.id > 0
    assert raw_product_fk(session_manager, product.id) == product.barcode.id

def test_update_rejects_second_barcode(product_service, barcode_service, product_with_barcode, make_barcode):
    product = product_service.get_by_id(product_with_barcode.id)
    product.attach(make_barcode('CB000020'))

    with pytest.raises(BarcodeAlreadyAssignedError):
        product_service.update(product)
    assert barcode_service.find_by_value('CB000020') is None
    assert product_service.get_by_id(product.id).barcode.id == product_with_barcode.barcode.id

def test_update_with_barcode_of_another_product(product_service, product_with_barcode, make_product):
    other = product_service.create(make_product(name='silla'))
    other.attach(product_with_barcode.barcode)

    with pytest.raises(BarcodeAlreadyAssignedError):
        product_service.update(other)

def test_update_without_barcode_detaches_but_keeps_it(product_service, barcode_service, session_manager, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id
    product = product_service.get_by_id(product_with_barcode.id)
    product.attach(None)

    product_service.update(product)

    assert raw_product_fk(session_manager, product.id) is None
    assert barcode_service.get_by_id(barcode_id) is not None

def test_update_missing_product(product_service, make_product):
    product = make_product()
    product.id = 55
    with pytest.raises(NotFoundError):
        product_service.update(product)

def test_update_barcode_of(product_service, product_with_barcode):
    barcode = product_service.update_barcode_of(
        product_with_barcode.id,
        barcode_type='ean8',
        value='CB000300',
        observations='relabelled'
    )

    assert barcode.id == product_with_barcode.barcode.id
    stored = product_service.get_by_id(product_with_barcode.id).barcode
    assert stored.type == BarcodeType.EAN8
    assert stored.value == 'CB000300'
    assert stored.observations == 'relabelled'
    assert stored.assigned_on == date(2024, 1, 15)

def test_update_barcode_of_product_without_barcode(product_service, make_product):
    product = product_service.create(make_product())
    with pytest.raises(InvalidEntityError, match='has no barcode'):
        product_service.update_barcode_of(product.id, value='CB1')

def test_search_by_name_or_brand(product_service, make_product):
    mesa = product_service.create(make_product(name='Mesa básica', brand='Muebleria Argentina'))
    silla = product_service.create(make_product(name='silla', brand='Fabrica de Muebles'))
    gone = product_service.create(make_product(name='mesa rota', brand='Otra'))
    product_service.delete(gone.id)

    assert [p.id for p in product_service.search('MESA')] == [mesa.id]
    assert [p.id for p in product_service.search('muebles')] == [silla.id]
    assert [p.id for p in product_service.search('mueble')] == [mesa.id, silla.id]
    assert product_service.search('sofa') == []

def test_search_requires_text(product_service):
    with pytest.raises(InvalidEntityError):
        product_service.search('  ')

def test_get_all_excludes_eliminated(product_service, make_product):
    kept = product_service.create(make_product(name='mesa'))
    dropped = product_service.create(make_product(name='silla'))
    product_service.delete(dropped.id)

    assert [p.id for p in product_service.get_all()] == [kept.id]

def test_find_by_barcode(product_service, product_with_barcode):
    barcode_id = product_with_barcode.barcode.id
    assert [p.id for p in product_service.find_by_barcode(barcode_id)] == [product_with_barcode.id]
    product_service.delete(product_with_barcode.id)
    assert product_service.find_by_barcode(barcode_id) == []

def test_clear_dangling(product_service, barcode_service, session_manager, product_with_barcode, make_product, make_barcode):
    healthy = product_service.create(make_product(name='silla', barcode=make_barcode('CB000002')))
    barcode_service.delete(product_with_barcode.barcode.id)

    repaired = product_service.clear_dangling()

    assert [p.id for p in repaired] == [product_with_barcode.id]
    assert raw_product_fk(session_manager, product_with_barcode.id) is None
    assert raw_product_fk(session_manager, healthy.id) == healthy.barcode.id
    assert product_service.find_dangling() == []
