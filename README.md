# xopnet

Building blocks for event-driven TCP networking. It has socket helpers with
IPv4 and IPv6 support, a wake-up pipe, readiness channels, receive and send
buffers, bounded and thread-safe queues, a logger and a memory block pool. It
also has a Base64 codec, an MD5 digest and H.264 parameter-set helpers.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is inside

- `xopnet.socket_util` configures and inspects sockets. It has `bind`,
  `connect` (with an optional millisecond timeout), `set_non_block`,
  `set_block`, `set_reuse_addr`, `set_reuse_port`, `set_no_delay`,
  `set_keep_alive`, `set_no_sigpipe` and the buffer-size setters. It also has
  `get_peer_ip`, `get_peer_port`, `get_socket_ip`, `is_ipv6_address` and
  `is_ipv6_socket`.
- `xopnet.tcp_socket.TcpSocket` owns one TCP socket. It can create, bind,
  listen, accept, connect, close and shut down writing. It is also a context
  manager.
- `xopnet.pipe.Pipe` is a non-blocking self-pipe with `read_end()` and
  `write_end()` descriptors. On Linux it is an OS pipe. Elsewhere it is a
  socket pair.
- `xopnet.channel.Channel` ties a descriptor to the events it waits for. It
  holds read, write, close and error callbacks. `EventType` holds the event
  flags. `handle_event` runs read before write, and a hang-up (`HUP`) runs the
  close callback and skips the error callback.
- `xopnet.buffer_reader.BufferReader` is a growable receive buffer. It has
  `feed`, `read_from(sock)`, the CRLF searches, `read_until_crlf` and
  `read_all`. The module also has `read_uint16/24/32_be/le`.
- `xopnet.buffer_writer.BufferWriter` is a bounded queue of outgoing packets.
  `send(sock, timeout)` drains it until a write is partial or would block. The
  module also has `write_uint16/24/32_be/le`.
- `xopnet.ring_buffer.RingBuffer` is a fixed-capacity FIFO. `push` returns
  False when the buffer is full. `pop` raises `IndexError` when it is empty.
- `xopnet.queues` has two thread-safe queues. `ThreadSafeQueue` can wake
  waiting consumers with `wake()`. `TerminableQueue` stops taking items after
  `terminate()`, and then raises `QueueTerminated` once it is drained.
- `xopnet.logger.Logger` is a shared logger, reached through
  `Logger.instance()`. It writes time-stamped lines to a file and passes each
  line to an optional callback. `Priority` holds the levels.
- `xopnet.timestamp` has a millisecond stopwatch, `Timestamp`, and
  `local_time_string()`.
- `xopnet.memory_manager` has fixed-size block pools (`MemoryPool`) behind
  `MemoryManager` and the module-level `alloc` and `free`.
- `xopnet.b64` is a streaming Base64 codec. Its output has 72-character lines
  and ends with a newline. The decoder skips characters that are not Base64.
- `xopnet.md5` is an incremental MD5 digest, `Md5`, with `md5_hex` as a
  shortcut.
- `xopnet.helper` has `avc_get_sps_pps`, which finds the SPS and PPS units in
  an H.264 Annex B stream. It also has `find_startcode` and
  `data_volume_display`.

## Example

```python
from xopnet.buffer_reader import BufferReader, read_uint16_be
from xopnet.buffer_writer import write_uint16_be
from xopnet.channel import Channel, EventType
from xopnet.pipe import Pipe
from xopnet.helper import data_volume_display
from xopnet.b64 import encode, decode
from xopnet.md5 import md5_hex

reader = BufferReader()
reader.feed(b"OPTIONS * RTSP/1.0\r\nCSeq: 1\r\n\r\n")
request = reader.read_until_crlf()   # the whole request, consumed

read_uint16_be(write_uint16_be(0x1234))   # 0x1234

with Pipe() as pipe:
    channel = Channel(pipe.read_end())
    channel.set_read_callback(lambda: print(pipe.read()))
    channel.enable_reading()
    pipe.write(b"x")
    channel.handle_event(EventType.IN)   # prints b'x'

data_volume_display(1536)   # '1.5 KB'
decode(encode(b"hello"))    # b'hello'
md5_hex(b"abc")             # '900150983cd24fb0d6963f7d28e17f72'
```

## What it does not do

The package has no event loop, task scheduler, timer queue, acceptor,
connection object or TCP server. Nothing in it waits on descriptors or calls
`Channel.handle_event` for you. You build that part yourself, for example with
`selectors`, using the channels, buffers and socket helpers above. The package
also has no command-line program.