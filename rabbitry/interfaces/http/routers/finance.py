from __future__ import annotations

from datetime import date as DtDate

from fastapi import APIRouter, Depends, Query, status

from rabbitry.application.use_cases.disposition import record_sale
from rabbitry.application.use_cases.finance import customers, transactions
from rabbitry.infrastructure.auth.context import FarmContext
from rabbitry.interfaces.http.deps import get_farm_context, get_uow
from rabbitry.interfaces.http.schemas.animals import AnimalResponse
from rabbitry.interfaces.http.schemas.finance import (
    CustomerCreate,
    CustomerResponse,
    FinanceSummaryResponse,
    SaleCreate,
    SaleRecordedResponse,
    SaleResponse,
    TransactionCreate,
    TransactionResponse,
)

router = APIRouter(prefix="/finance", tags=["finance"])


@router.get("/transactions", response_model=list[TransactionResponse])
async def list_transactions(
    type_filter: str | None = Query(None, alias="type"),
    date_from: DtDate | None = Query(None),
    date_to: DtDate | None = Query(None),
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[TransactionResponse]:
    items = await transactions.list_transactions(
        uow, ctx.farm_id, type=type_filter, date_from=date_from, date_to=date_to
    )
    return [TransactionResponse.model_validate(t) for t in items]


@router.post(
    "/transactions", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED
)
async def create_transaction(
    payload: TransactionCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> TransactionResponse:
    created = await transactions.create_transaction(
        uow, ctx.farm_id, transactions.CreateTransactionInput(**payload.model_dump())
    )
    return TransactionResponse.model_validate(created)


@router.get("/summary", response_model=FinanceSummaryResponse)
async def finance_summary(
    date_from: DtDate | None = Query(None),
    date_to: DtDate | None = Query(None),
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> FinanceSummaryResponse:
    summary = await transactions.finance_summary(
        uow, ctx.farm_id, date_from=date_from, date_to=date_to
    )
    return FinanceSummaryResponse(
        income=summary.income,
        expense=summary.expense,
        net=summary.net,
        date_from=summary.date_from,
        date_to=summary.date_to,
    )


@router.post("/sales", response_model=SaleRecordedResponse, status_code=status.HTTP_201_CREATED)
async def record_sale_endpoint(
    payload: SaleCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> SaleRecordedResponse:
    new_customer = (
        record_sale.NewCustomer(**payload.new_customer.model_dump())
        if payload.new_customer
        else None
    )
    result = await record_sale.execute(
        uow,
        ctx.farm_id,
        record_sale.RecordSaleInput(
            animal_ids=payload.animal_ids,
            amount=payload.amount,
            date=payload.date,
            buyer_name=payload.buyer_name,
            customer_id=payload.customer_id,
            new_customer=new_customer,
            notes=payload.notes,
        ),
    )
    return SaleRecordedResponse(
        sale=SaleResponse.model_validate(result.sale),
        transaction=TransactionResponse.model_validate(result.transaction),
        animals=[AnimalResponse.model_validate(a) for a in result.animals],
        customer=CustomerResponse.model_validate(result.customer) if result.customer else None,
    )


@router.get("/sales", response_model=list[SaleResponse])
async def list_sales(
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[SaleResponse]:
    sales = await customers.list_sales(uow, ctx.farm_id)
    return [SaleResponse.model_validate(s) for s in sales]


@router.get("/customers", response_model=list[CustomerResponse])
async def list_customers(
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> list[CustomerResponse]:
    items = await customers.list_customers(uow, ctx.farm_id)
    return [CustomerResponse.model_validate(c) for c in items]


@router.post("/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    ctx: FarmContext = Depends(get_farm_context),
    uow=Depends(get_uow),
) -> CustomerResponse:
    created = await customers.create_customer(
        uow, ctx.farm_id, customers.CreateCustomerInput(**payload.model_dump())
    )
    return CustomerResponse.model_validate(created)
