"""
Command-line interface for Wallet Storage Python SDK
Create spaces and put, get, list and delete resources on a storage server
"""

import argparse
import asyncio
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Optional

from .version import __version__
from .addressing.urn_uuid import is_urn_uuid, urn_uuid_from_uuid
from .client import StorageClient
from .config.client_config import load_config
from .crypto.ed25519 import Ed25519Signer
from .exceptions import WalletStorageSDKError
from .http_clients.response import Blob, StorageResponse

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='wallet-storage',
        description='Wallet Storage command-line interface for spaces and resources'
    )
    
    parser.add_argument(
        '--version',
        action='version',
        version=f'Wallet Storage Python SDK {__version__}'
    )
    parser.add_argument('--url', help='Storage server URL (default: $STORAGE_URL or https://data.pub)')
    parser.add_argument('--config', help='JSON configuration file')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    setup_space_parsers(subparsers)
    setup_resource_parsers(subparsers)
    setup_keygen_parser(subparsers)
    
    return parser


def _add_identity_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '-i', '--identity',
        help='Ed25519 private key file (PEM or OpenSSH) used to sign requests'
    )


def setup_space_parsers(subparsers):
    """Setup space subcommands."""
    create_parser = subparsers.add_parser('create-space', help='Create a space')
    _add_identity_argument(create_parser)
    create_parser.add_argument('--set-controller', action='store_true', help='Make the identity the space controller')
    create_parser.add_argument('--uuid', help='UUID of the space (generated if omitted)')
    create_parser.add_argument('--dry-run', action='store_true', help='Print the space object without sending it')
    
    get_parser = subparsers.add_parser('get-space', help='Get a space representation')
    get_parser.add_argument('-s', '--space', required=True, help='Space id (urn:uuid:...)')
    _add_identity_argument(get_parser)


def setup_resource_parsers(subparsers):
    """Setup resource subcommands."""
    put_parser = subparsers.add_parser('put-resource', help='PUT a file as a resource in a space')
    put_parser.add_argument('-s', '--space', required=True, help='Space id (urn:uuid:...)')
    put_parser.add_argument('-r', '--resource', help='Resource path within the space (generated if omitted)')
    put_parser.add_argument('-f', '--file', required=True, help='File to upload')
    put_parser.add_argument('--content-type', help='Media type of the file (guessed if omitted)')
    _add_identity_argument(put_parser)
    
    get_parser = subparsers.add_parser('get-resource', help='GET a resource from a space')
    get_parser.add_argument('-s', '--space', required=True, help='Space id (urn:uuid:...)')
    get_parser.add_argument('-r', '--resource', required=True, help='Resource path within the space')
    get_parser.add_argument('-o', '--output', help='Write the resource to this file instead of stdout')
    _add_identity_argument(get_parser)
    
    delete_parser = subparsers.add_parser('delete-resource', help='DELETE a resource from a space')
    delete_parser.add_argument('-s', '--space', required=True, help='Space id (urn:uuid:...)')
    delete_parser.add_argument('-r', '--resource', required=True, help='Resource path within the space')
    _add_identity_argument(delete_parser)
    
    list_parser = subparsers.add_parser('list', help='List the items of a collection in a space')
    list_parser.add_argument('-s', '--space', required=True, help='Space id (urn:uuid:...)')
    list_parser.add_argument('-p', '--path', help='Collection path within the space')
    _add_identity_argument(list_parser)


def setup_keygen_parser(subparsers):
    """Setup key generation subcommand."""
    keygen_parser = subparsers.add_parser('keygen', help='Generate an Ed25519 identity')
    keygen_parser.add_argument('-o', '--output', required=True, help='File to write the PEM private key to')
    keygen_parser.add_argument('--force', action='store_true', help='Overwrite an existing file')


def load_signer(identity: Optional[str]) -> Optional[Ed25519Signer]:
    """Load the signer named by --identity, if any."""
    if not identity:
        return None
    signer = Ed25519Signer.from_key_file(identity)
    logger.debug(f"Signing requests as {signer.id}")
    return signer


def require_space_id(value: str) -> str:
    if not is_urn_uuid(value):
        raise WalletStorageSDKError("--space option must be a valid urn:uuid:{uuid}", "INVALID_ARGUMENT")
    return value


def format_response(response: StorageResponse) -> str:
    return json.dumps({
        'status': response.status,
        'ok': response.ok,
        'headers': response.headers,
    }, indent=2)


async def handle_create_space_command(client: StorageClient, args) -> int:
    """Handle space creation."""
    signer = load_signer(args.identity)
    space_id = urn_uuid_from_uuid(args.uuid) if args.uuid else None
    space = client.space(space_id, signer=signer)
    
    space_object = None
    if args.set_controller:
        if signer is None:
            print("Error: --set-controller requires --identity", file=sys.stderr)
            return 1
        space_object = {'controller': signer.controller}
    if args.uuid:
        space_object = dict(space_object or {}, id=space.id)
    
    if args.verbose or args.dry_run:
        print(f"space object that will be sent: {json.dumps(space_object)}", file=sys.stderr)
    if args.dry_run:
        return 0
    
    response = await space.put(Blob.from_json(space_object) if space_object is not None else None)
    print(format_response(response))
    if response.ok:
        print(f"created space {space.id} at {space.path}", file=sys.stderr)
    return 0 if response.ok else 1


async def handle_get_space_command(client: StorageClient, args) -> int:
    space = client.space(require_space_id(args.space), signer=load_signer(args.identity))
    response = await space.get()
    if not response.ok:
        print(format_response(response), file=sys.stderr)
        return 1
    print(await response.text())
    return 0


async def handle_put_resource_command(client: StorageClient, args) -> int:
    file_path = Path(args.file)
    if not file_path.is_file():
        print(f"Error: file does not exist {args.file}", file=sys.stderr)
        return 1
    
    content_type = args.content_type or mimetypes.guess_type(file_path.name)[0] or 'application/octet-stream'
    space = client.space(require_space_id(args.space), signer=load_signer(args.identity))
    resource = space.resource(args.resource)
    
    response = await resource.put(Blob(file_path.read_bytes(), content_type))
    print(format_response(response))
    if response.ok:
        print(f"put resource {resource.path}", file=sys.stderr)
    return 0 if response.ok else 1


async def handle_get_resource_command(client: StorageClient, args) -> int:
    space = client.space(require_space_id(args.space), signer=load_signer(args.identity))
    response = await space.resource(args.resource).get()
    if not response.ok:
        print(format_response(response), file=sys.stderr)
        return 1
    
    blob = await response.blob()
    if args.output:
        Path(args.output).write_bytes(blob.data)
    else:
        sys.stdout.buffer.write(blob.data)
        sys.stdout.flush()
    return 0


async def handle_delete_resource_command(client: StorageClient, args) -> int:
    space = client.space(require_space_id(args.space), signer=load_signer(args.identity))
    response = await space.resource(args.resource).delete()
    print(format_response(response))
    return 0 if response.ok else 1


async def handle_list_command(client: StorageClient, args) -> int:
    space = client.space(require_space_id(args.space), signer=load_signer(args.identity))
    async for item in space.collection_items(args.path):
        print(json.dumps({'name': item.name, 'url': item.url}))
    return 0


def handle_keygen_command(args) -> int:
    """Handle key generation command."""
    output = Path(args.output)
    if output.exists() and not args.force:
        print(f"Error: {output} already exists (use --force to overwrite)", file=sys.stderr)
        return 1
    
    signer = Ed25519Signer.generate()
    output.write_bytes(signer.to_pem())
    output.chmod(0o600)
    print(f"Private key written to: {output}")
    print(f"Verification method: {signer.id}")
    print(f"Controller: {signer.controller}")
    return 0


COMMAND_HANDLERS = {
    'create-space': handle_create_space_command,
    'get-space': handle_get_space_command,
    'put-resource': handle_put_resource_command,
    'get-resource': handle_get_resource_command,
    'delete-resource': handle_delete_resource_command,
    'list': handle_list_command,
}


async def run_command(args, config) -> int:
    async with StorageClient(config=config) as client:
        return await COMMAND_HANDLERS[args.command](client, args)


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    try:
        config = load_config(args.config, base_url=args.url)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else config.log_level,
            format='%(levelname)s %(name)s: %(message)s'
        )
        if args.command == 'keygen':
            return handle_keygen_command(args)
        return asyncio.run(run_command(args, config))
    except WalletStorageSDKError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
