"""Payment category: paystack, flutterwave and sayswitch."""

from typing import Any, Dict

from abstraction.models import (
    CategoryConfig,
    ClientOperation,
    DispatchContext,
    FieldRule,
    VendorEntry,
    VendorMapping,
)


# Paystack amounts are in the minor currency unit (kobo, pesewas, cents)
MINOR_UNIT_FACTOR = 100


def to_minor_unit(amount) -> int:
    return int(round(amount * MINOR_UNIT_FACTOR))


def paystack_initialize_transaction(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {
        "email": client_input["email"],
        "amount": to_minor_unit(client_input["amount"]),
        "currency": client_input.get("currency"),
        "reference": client_input.get("reference") or f"ref_{context.millis()}",
        "callback_url": context.callback_url,
    }


def paystack_verify_transaction(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {"reference": client_input["reference"]}


def flutterwave_initiate_payment(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {
        "amount": client_input["amount"],
        "currency": client_input.get("currency"),
        "tx_ref": client_input.get("reference") or f"fw_{context.millis()}",
        "customer": {"email": client_input["email"]},
    }


def flutterwave_verify_payment(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    # Flutterwave accepts either key for lookups
    return {
        "transaction_id": client_input["reference"],
        "tx_ref": client_input["reference"],
    }


def sayswitch_purchase_airtime(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {
        "phone": client_input["phone"],
        "amount": client_input["amount"],
        "network": client_input["network"],
        "reference": client_input.get("reference") or f"ss_{context.millis()}",
    }


def sayswitch_get_transaction(client_input: Dict[str, Any], context: DispatchContext) -> Dict[str, Any]:
    return {"txn_id": client_input["transactionId"]}


def payment_config() -> CategoryConfig:
    return CategoryConfig(
        client={
            "initializeTransaction": ClientOperation(schema={
                "amount": FieldRule(type="number", required=True),
                "currency": FieldRule(type="string", default="NGN"),
                "email": FieldRule(type="string", required=True),
                "reference": FieldRule(type="string"),
                "metadata": FieldRule(type="object"),
            }),
            "verifyTransaction": ClientOperation(schema={
                "reference": FieldRule(type="string", required=True),
            }),
            "createCustomer": ClientOperation(schema={
                "email": FieldRule(type="string", required=True),
                "firstName": FieldRule(type="string"),
                "lastName": FieldRule(type="string"),
                "phone": FieldRule(type="string"),
            }),
            "purchaseAirtime": ClientOperation(schema={
                "phone": FieldRule(type="string", required=True),
                "amount": FieldRule(type="number", required=True),
                "network": FieldRule(type="string", required=True),
                "reference": FieldRule(type="string"),
            }),
            "getTransaction": ClientOperation(schema={
                "transactionId": FieldRule(type="string", required=True),
            }),
        },
        vendors={
            "paystack": VendorEntry(
                adapter="paystack",
                mappings={
                    "initializeTransaction": VendorMapping(
                        tool="initialize-transaction",
                        transform=paystack_initialize_transaction,
                    ),
                    "verifyTransaction": VendorMapping(
                        tool="verify-transaction",
                        transform=paystack_verify_transaction,
                    ),
                },
            ),
            "flutterwave": VendorEntry(
                adapter="flutterwave-v3",
                mappings={
                    "initializeTransaction": VendorMapping(
                        tool="initiate-payment",
                        transform=flutterwave_initiate_payment,
                    ),
                    "verifyTransaction": VendorMapping(
                        tool="verify-payment",
                        transform=flutterwave_verify_payment,
                    ),
                },
            ),
            "sayswitch": VendorEntry(
                adapter="sayswitch-api-integration",
                mappings={
                    "purchaseAirtime": VendorMapping(
                        tool="purchase-airtime",
                        transform=sayswitch_purchase_airtime,
                    ),
                    "getTransaction": VendorMapping(
                        tool="get-transaction",
                        transform=sayswitch_get_transaction,
                    ),
                },
            ),
        },
    )
