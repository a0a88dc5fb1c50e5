"""Banking category: wise and bap."""

from typing import Any, Dict

from abstraction.models import (
    CategoryConfig,
    ClientOperation,
    DispatchContext,
    FieldRule,
    VendorEntry,
    VendorMapping,
)


WISE_ADAPTER = "7-wise-multicurrency-account-mca-platform-api-s"


def wise_get_account_balance(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {"accountId": client_input["accountId"]}


def wise_create_transfer(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {
        "sourceAccount": client_input["fromAccount"],
        "targetAccount": client_input["toAccount"],
        "amount": {
            "value": client_input["amount"],
            "currency": client_input.get("currency"),
        },
        "reference": client_input.get("reference") or f"wise_{context.millis()}",
    }


def bap_validate_account_number(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {
        "account_number": client_input["accountNumber"],
        "bank_code": client_input["bankCode"],
    }


def banking_config() -> CategoryConfig:
    return CategoryConfig(
        client={
            "getAccountBalance": ClientOperation(schema={
                "accountId": FieldRule(type="string", required=True),
            }),
            "transferFunds": ClientOperation(schema={
                "fromAccount": FieldRule(type="string", required=True),
                "toAccount": FieldRule(type="string", required=True),
                "amount": FieldRule(type="number", required=True),
                "currency": FieldRule(type="string", default="NGN"),
                "reference": FieldRule(type="string"),
            }),
            "verifyAccount": ClientOperation(schema={
                "accountNumber": FieldRule(type="string", required=True),
                "bankCode": FieldRule(type="string", required=True),
            }),
        },
        vendors={
            "wise": VendorEntry(
                adapter=WISE_ADAPTER,
                mappings={
                    "getAccountBalance": VendorMapping(
                        tool="multi-currency-account-manage-mca-get-multi-currency-account",
                        transform=wise_get_account_balance,
                    ),
                    "transferFunds": VendorMapping(
                        tool="transfers-create-transfer",
                        transform=wise_create_transfer,
                    ),
                },
            ),
            "bap": VendorEntry(
                adapter="bap",
                mappings={
                    "verifyAccount": VendorMapping(
                        tool="validate-account-number",
                        transform=bap_validate_account_number,
                    ),
                },
            ),
        },
    )
