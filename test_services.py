# test_services.py
"""Tests directos de los servicios, sin pasar por HTTP."""

import pytest

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.crud import client_crud
from app.schemas import client_schema, purchase_schema
from app.services.client_service import ClientRegistry
from app.services.purchase_service import PurchaseLedger


def test_registry_rejects_duplicate_email(run_in_session):
    async def scenario(session):
        registry = ClientRegistry(session)
        await registry.register(client_schema.ClientCreate(name="Ana", email="ana@x.com"))
        with pytest.raises(ConflictError):
            await registry.register(client_schema.ClientCreate(name="Outra Ana", email="ana@x.com"))
    run_in_session(scenario)


def test_registry_rejects_blank_name(run_in_session):
    async def scenario(session):
        with pytest.raises(ValidationError):
            await ClientRegistry(session).register(client_schema.ClientCreate(name=""))
    run_in_session(scenario)


def test_ledger_delete_unknown_raises_not_found(run_in_session):
    async def scenario(session):
        with pytest.raises(NotFoundError):
            await PurchaseLedger(session).delete_by_id("missing")
    run_in_session(scenario)


def test_ledger_delete_decrements_client(run_in_session):
    async def scenario(session):
        client = await ClientRegistry(session).register(client_schema.ClientCreate(name="Ana"))
        ledger = PurchaseLedger(session)
        purchase = await ledger.create(purchase_schema.PurchaseCreate(
            client_id=client.id, total_amount=100, details="lentes"))
        await ledger.delete_by_id(purchase.id)
        return client.id

    client_id = run_in_session(scenario)

    async def check(session):
        return (await client_crud.get_client(session, client_id)).purchase_count
    assert run_in_session(check) == 0


def test_adjust_purchase_count_floors_at_zero(run_in_session):
    async def scenario(session):
        client = await client_crud.create_client(session, name="Ana")
        affected = await client_crud.adjust_purchase_count(session, client.id, -1)
        return client.id, affected

    client_id, affected = run_in_session(scenario)
    assert affected == 0

    async def check(session):
        return (await client_crud.get_client(session, client_id)).purchase_count
    assert run_in_session(check) == 0


def test_ledger_structured_variant_satisfies_required_fields(run_in_session):
    async def scenario(session):
        purchase = await PurchaseLedger(session).create(purchase_schema.PurchaseCreate(
            client_id="c1", total_amount=250, payment_method=purchase_schema.PaymentMethod.CARD))
        return purchase.payment_method, purchase.details

    payment_method, details = run_in_session(scenario)
    assert payment_method == "Card"
    assert details is None


def test_registry_trims_name_on_register_and_update(run_in_session):
    async def scenario(session):
        registry = ClientRegistry(session)
        client = await registry.register(client_schema.ClientCreate(name="  Ana  "))
        assert client.name == "Ana"
        updated = await registry.update_by_id(client.id, client_schema.ClientUpdate(name=" Bea "))
        assert updated.name == "Bea"
        with pytest.raises(ValidationError):
            await registry.update_by_id(client.id, client_schema.ClientUpdate(name="   "))
    run_in_session(scenario)
