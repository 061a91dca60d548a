# pkapps

Small command-line tools and the libraries behind them. Nothing outside the
Python standard library is needed at run time; the socket tools need a POSIX
system with Unix-domain sockets.

## Installation

```
pip install .
```

## Modules

- `pkapps.fixed` — fixed-point numbers with ten fractional bits.
  `to_fixed` converts an integer; `fixed_mul` and `fixed_div` truncate
  towards zero. `format_fixed`, `format_dec`, `format_sdec`,
  `format_dec_extend` and `format_hex` turn numbers into text
  (`format_hex` gives 16 upper-case hex digits).
- `pkapps.heap` — `Heap`, a first-fit allocator over a fixed byte arena
  (64 KiB by default) with in-band boundary tags. `alloc` returns an integer
  address of zeroed bytes, `free` merges the block with free neighbours,
  `realloc` moves a block and copies what fits, and `read` / `write` access
  the arena. An allocation that cannot be satisfied, or an address outside
  the arena, raises `HeapError`.
- `pkapps.layer` — `Layer`, a dense layer with a leaky rectifier, working
  entirely in fixed-point integers. `default_learning_rate()` is one tenth.
- `pkapps.network` — `Network`, a stack of layers with `add_layer`,
  `activate`, `learn` (gradient descent on mean squared error) and `cost`.
- `pkapps.nn` — the `pknn` command.
- `pkapps.packet` — the window server's little-endian wire format:
  `CommandHeader`, `CreateWindow`, `MoveWindow`, `Command`, `Status`,
  `encode_status` / `decode_status`, `receive_command` / `send_status`
  over a socket, and `WindowTable`, a table of up to 1024 `Window`s
  addressed by 1-based id. Malformed messages raise `ProtocolError`.
- `pkapps.pkwin` — `serve` runs the window server on a Unix socket,
  one thread per client; `handle_client` serves one connection;
  `create_window` connects as a client, asks for a window and returns the
  server's `Status`.
- `pkapps.coreutils` — `cat`, `echo`, `ls`, `tree`, `mkdir`, `touch` and
  `rm`. Each takes an argument vector (program name first) and an output
  stream and returns an exit status.
- `pkapps.shell` — `Shell` and `split_line`. Lines are split at every
  single space; `'` pipes one command's output to the next, `.` redirects
  output into a file, and `cd` and `exit` are built in (`exit` raises
  `ShellExit`).
- `pkapps.counter` — `serve_counter` accepts one client and answers every
  32-bit number with that number plus one; `run_client` keeps sending the
  number back and prints each reply in hex.

## Commands

Train a 2-8-1 network on XOR, draw its average cost as it learns, and show
its answers:

```
pknn graph
```

Build the small 2-3-2 example network with preset weights:

```
pknn hw
```

Run one of the file utilities, named by the first argument:

```
pkutils cat notes.txt
pkutils echo hello world
pkutils ls
pkutils tree
pkutils mkdir newdir
pkutils touch a.txt
pkutils rm a.txt
```

Start the shell interactively, or run a script of commands one per line:

```
pksh
pksh script.txt
```

In the shell, for example:

```
> echo hello . out.txt
> cat out.txt
> cd newdir
> exit
```

Start the window server, optionally on a given socket path
(default `/tmp/pkw.sock`):

```
pkwin
pkwin /tmp/my.sock
```

Run the counter server and a client against it, optionally with a socket path
(default `/tmp/test.sock`) and a number of rounds (default: forever):

```
pkcounter
pkcounter /tmp/counter.sock 10
```

## Using the libraries

```python
from pkapps.fixed import to_fixed, fixed_mul, format_fixed
from pkapps.network import Network
from pkapps.layer import default_learning_rate

half = to_fixed(1) // 2
print(format_fixed(fixed_mul(half, to_fixed(3)), 4))  # 1.5

net = Network(2, default_learning_rate())
net.add_layer(8)
net.add_layer(1)
net.activate([to_fixed(0), to_fixed(1)])
net.learn([to_fixed(1)])
```

```python
from pkapps.heap import Heap

heap = Heap()
address = heap.alloc(16)
heap.write(address, b"hello")
print(heap.read(address, 5))
heap.free(address)
```

## What it does not do

- The shell runs only the commands in its table (by default the file
  utilities above, run in-process); it does not start other programs. Text
  piped with `'` is handed to the next command as the shell's `stdin`
  attribute, which none of the built-in utilities read.
- The window server keeps a table of the windows its clients create; it
  draws nothing and has no display. `MoveWindow` commands are acknowledged
  but change nothing.
- `pknn hw` only builds the example network and reports it ready; it does not
  train or evaluate it.

## Running the tests

```
pip install .[test]
pytest
```