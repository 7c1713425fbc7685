"""
Smart Contract Deployment Script
Deploys DecntralizedSocialMediaPlatform and prints its address

Run from the repository root:
    python -m scripts.deploy
"""

import os
import sys
import asyncio
from loguru import logger

from blockchain.toolkit import DeploymentToolkit

CONTRACT_NAME = "DecntralizedSocialMediaPlatform"


def configure_logging():
    """Send log output to stderr (and optionally a file); stdout is for the address"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level=os.getenv('LOG_LEVEL', 'INFO'),
        diagnose=False
    )

    log_file = os.getenv('DEPLOY_LOG_FILE')
    if log_file:
        logger.add(
            log_file,
            rotation="1 day",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
            level="DEBUG"
        )


async def deploy(toolkit) -> str:
    """
    Deploy the contract and wait for it to be mined

    Args:
        toolkit: Object providing get_contract_factory()

    Returns:
        Deployed contract address
    """
    Social = await toolkit.get_contract_factory(CONTRACT_NAME)
    social = await Social.deploy()

    await social.deployed()

    return social.address


async def _run(toolkit):
    try:
        return await deploy(toolkit)
    finally:
        await toolkit.close()


def main(toolkit=None) -> int:
    """
    Run one deployment

    Returns:
        0 on success, 1 on any failure
    """
    configure_logging()

    try:
        if toolkit is None:
            toolkit = DeploymentToolkit.from_env()
        address = asyncio.run(_run(toolkit))
    except Exception as e:
        logger.opt(exception=e).error(f"Deployment failed: {e}")
        return 1

    print(f"{CONTRACT_NAME} deployed to: {address}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
