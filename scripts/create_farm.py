#!/usr/bin/env python3
"""
Script to register a farm for an account and print a development token.

This script:
1. Creates the farm owned by the given account id (or a new one)
2. Prints a bearer token signed with JWT_SECRET_KEY for local testing

Usage:
  python scripts/create_farm.py --name "Sunny Rabbitry" [--owner-id UUID] [--currency USD]
"""

import argparse
import asyncio
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Add the project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rabbitry.application.errors import AppError
from rabbitry.application.use_cases.farms import create_farm
from rabbitry.config.settings import get_settings
from rabbitry.infrastructure.auth.jwt_service import JWTService
from rabbitry.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def create_farm_with_token(
    name: str, owner_id: UUID | None, currency: str, timezone: str
) -> None:
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    owner_uuid = owner_id or uuid4()

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            farm = await create_farm.execute(
                uow,
                owner_uuid,
                create_farm.CreateFarmInput(
                    name=name,
                    currency=currency,
                    timezone=timezone,
                    gestation_days=settings.default_gestation_days,
                    palpation_days=settings.default_palpation_days,
                    weaning_days=settings.default_weaning_days,
                ),
            )

        print("\n✅ Farm created successfully!")
        print(f"   Farm ID: {farm.id}")
        print(f"   Owner ID: {owner_uuid}")
        print(f"   Tag prefix: {farm.tag_prefix}")

        jwt_service = JWTService(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
        token = jwt_service.create_access_token(subject=owner_uuid)
        print("\n🔑 Development access token:")
        print(f"   {token}")
        print(f"\n   Send it with the header {settings.farm_header}: {farm.id}")
    except AppError as exc:
        print(f"\n❌ Error creating farm: {exc.message}")
        sys.exit(1)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Register a farm and print a dev token")
    parser.add_argument("--name", required=True, help="Farm name")
    parser.add_argument("--owner-id", type=UUID, default=None, help="Existing account id")
    parser.add_argument("--currency", default="USD", help="ISO 4217 currency code")
    parser.add_argument("--timezone", default="UTC", help="IANA timezone name")
    args = parser.parse_args()
    asyncio.run(create_farm_with_token(args.name, args.owner_id, args.currency, args.timezone))


if __name__ == "__main__":
    main()
