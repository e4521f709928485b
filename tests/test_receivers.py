# tests/test_receivers.py
import asyncio
import contextlib
import socket
import stat

import pytest

from infrastructure.process_runner import CommandFailedError
from infrastructure.transport.helper_receiver import HelperProcessReceiver
from infrastructure.transport.socket_receiver import SocketReceiver


def helper_script(tmp_path, body):
    helper = tmp_path / 'fake-nc-vsock'
    helper.write_text(f'#!/bin/sh\n{body}\n')
    helper.chmod(helper.stat().st_mode | stat.S_IXUSR)
    return helper


async def send(port, payload, local_port=0):
    reader, writer = await asyncio.open_connection('127.0.0.1', port, local_addr=('127.0.0.1', local_port))
    writer.write(payload)
    await writer.drain()
    writer.close()
    await writer.wait_closed()


def test_helper_argv():
    receiver = HelperProcessReceiver('/bin/nc-vsock', service_port=2, peer_port=0)
    assert receiver.argv == ['/bin/nc-vsock', '2', '0']


@pytest.mark.asyncio
async def test_helper_stdout_becomes_document(tmp_path):
    helper = helper_script(tmp_path, 'echo "$1 $2"; printf \'{"netconf": {}}\'')
    destination = tmp_path / 'vm.json'
    written = await HelperProcessReceiver(str(helper), 2, 0).receive(destination)
    assert destination.read_text() == '2 0\n{"netconf": {}}'
    assert written == len(destination.read_bytes())


@pytest.mark.asyncio
async def test_helper_failure_raises(tmp_path):
    helper = helper_script(tmp_path, 'echo "no route to host" >&2; exit 1')
    with pytest.raises(CommandFailedError) as excinfo:
        await HelperProcessReceiver(str(helper), 2, 0).receive(tmp_path / 'vm.json')
    assert excinfo.value.returncode == 1
    assert 'no route to host' in excinfo.value.stderr


@pytest.mark.asyncio
async def test_missing_helper_raises(tmp_path):
    with pytest.raises(CommandFailedError):
        await HelperProcessReceiver(str(tmp_path / 'absent'), 2, 0).receive(tmp_path / 'vm.json')


@pytest.mark.asyncio
async def test_socket_receiver_copies_until_eof(tmp_path):
    receiver = SocketReceiver(service_port=0, family='inet')
    destination = tmp_path / 'vm.json'
    payload = b'{"mounts": []}' * 10000

    task = asyncio.create_task(receiver.receive(destination))
    await asyncio.wait_for(receiver.listening.wait(), timeout=5)
    await send(receiver.bound_address[1], payload)

    assert await asyncio.wait_for(task, timeout=5) == len(payload)
    assert destination.read_bytes() == payload


@pytest.mark.asyncio
async def test_socket_receiver_ignores_unexpected_peer_port(tmp_path):
    with socket.socket() as probe:
        probe.bind(('127.0.0.1', 0))
        expected_port = probe.getsockname()[1]

    receiver = SocketReceiver(service_port=0, peer_port=expected_port, family='inet')
    destination = tmp_path / 'vm.json'
    task = asyncio.create_task(receiver.receive(destination))
    await asyncio.wait_for(receiver.listening.wait(), timeout=5)
    port = receiver.bound_address[1]

    with contextlib.suppress(ConnectionError):
        await send(port, b'{"from": "stranger"}')
    await asyncio.sleep(0.05)
    assert not task.done()

    await send(port, b'{"from": "host"}', local_port=expected_port)
    await asyncio.wait_for(task, timeout=5)
    assert destination.read_bytes() == b'{"from": "host"}'


def test_socket_receiver_rejects_unknown_family():
    with pytest.raises(ValueError):
        SocketReceiver(service_port=2, family='unix')
