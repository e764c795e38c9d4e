# containertest

Building blocks for tests that run throwaway containers. The package has no
runtime dependencies beyond the standard library.

## Modules

### `containertest.images`

- `extract_images_from_dockerfile(dockerfile, build_args=None)` reads a
  Dockerfile and returns the image named on each `FROM` line, in order.
  `${NAME}` placeholders are replaced from `build_args`. Entries whose value
  is `None` are ignored. It raises `OSError` if the file cannot be read.
- `extract_registry(image, fallback)` returns the registry part of an image
  reference, such as `localhost:5000` or `docker.elastic.co`. If that part
  does not look like a URL, it returns `fallback`. For an empty image name it
  returns `""`.
- `is_url(value)` tells whether a string looks like a URL, a host name or an
  IP address.
- `INDEX_DOCKER_IO` is the default Docker Hub index address.

### `containertest.docker_host`

- `extract_docker_host(docker_host=None)` returns the path of the Docker
  socket:
  - the `TESTCONTAINERS_DOCKER_SOCKET_OVERRIDE` environment variable wins if
    it is set;
  - otherwise the path of a `unix://` URL given as `docker_host`;
  - otherwise `/var/run/docker.sock`.
- `in_a_container(path="/.dockerenv")` reports whether the marker file that
  Docker creates inside containers exists.
- `default_gateway_ip()` returns the default gateway address. It gets it by
  running `ip route` through `sh` and `awk`. It raises `RuntimeError` if the
  command fails or prints nothing.

### `containertest.session`

- `session_id()` returns a UUID that is created once per process.
  `session_string()` returns the same UUID as a string.
- `default_labels()` returns a new dict with three labels:
  - `org.testcontainers.lang`
  - `org.testcontainers.version`
  - `org.testcontainers.sessionId`

  The `LABEL_*` constants and `VERSION` are also available.

### `containertest.archive`

- `tar_dir(src, file_mode)` returns the gzip-compressed tar bytes of a
  directory.
  - Entry names are relative to the directory's parent, so they start with
    its own name.
  - Every entry gets `file_mode`.
  - Symbolic links are skipped.
  - Progress lines are printed to standard output.
- `tar_file(content, base_path, file_mode)` returns the gzip-compressed tar
  bytes of a single entry. The entry holds `content` and is named after the
  base name of `base_path`.
- `is_dir(path)` tells whether a path is a directory. It raises `OSError` if
  the path does not exist.

### `containertest.logs`

- `LogType` has the values `STDOUT` and `STDERR`.
- `Log` is a frozen record with `log_type` and `content` (bytes).
- `LogConsumer` is a protocol with `accept(log)`.
- `Logging` is a protocol with `printf(fmt, *args)`.
- `StandardLogger(stream=None, prefix="")` writes timestamped lines to the
  given stream, or to standard error when no stream is given.
  `DEFAULT_LOGGER` is an instance of it.
- `log_docker_server_info(client, logger)` logs the server version, API
  version, operating system and total memory.
  - `client` must be an object with `info()` and `client_version()`.
  - If `info()` raises, the failure is logged instead.

### `containertest.lifecycle`

- `ContainerLifecycleHooks` holds lists of callables, one list per stage:
  - `pre_creates`, `post_creates`
  - `pre_starts`, `post_starts`
  - `pre_stops`, `post_stops`
  - `pre_terminates`, `post_terminates`

  Its methods run the lists: `creating`, `created`, `starting`, `started`,
  `stopping`, `stopped`, `terminating` and `terminated`.
- `run_creating_hooks(hooks, request)` runs the creation hooks of several hook
  sets.
- `run_container_hooks(hooks, stage, container)` runs one stage of several
  hook sets. The stage must be one of the names in `STAGES`; any other name
  raises `ValueError`.
- `default_logging_hook(logger)` returns hooks that log each stage.
  - Requests need an `image` attribute.
  - Containers need an `id` attribute, which is shortened to 12 characters.

Hooks run in order. The first hook that raises stops the rest, and its
exception propagates.

### `containertest.processor`

- `demultiplex(stream)` splits Docker's multiplexed output into
  `(stdout, stderr)` bytes. `stream` can be bytes or a binary reader.
  - A truncated trailing frame is dropped.
  - An unknown stream type raises `ValueError`.
  - A daemon error frame raises `RuntimeError`.
- `multiplexed()` returns an option that replaces a reader with its
  demultiplexed stdout.
- `apply_options(reader, *options)` applies such options in order and returns
  the resulting reader. `StreamType` and `ProcessOptions` support them.

## Examples

```python
from containertest.images import extract_registry, INDEX_DOCKER_IO
from containertest.archive import tar_file

extract_registry("localhost:5000/nginx:latest", INDEX_DOCKER_IO)  # 'localhost:5000'
extract_registry("nginx:latest", INDEX_DOCKER_IO)                 # INDEX_DOCKER_IO

archive = tar_file(b"echo hi\n", "hello.sh", 0o755)  # gzip'd tar bytes
```

```python
from containertest.lifecycle import ContainerLifecycleHooks, default_logging_hook
from containertest.logs import StandardLogger

hooks = [
    default_logging_hook(StandardLogger()),
    ContainerLifecycleHooks(post_starts=[lambda c: print("up:", c)]),
]
```

## What it does not do

This package does not talk to a Docker daemon. It does not create, start,
stop or remove containers or networks, and it does not wait for containers to
become ready. The hook, log and stream helpers work on objects that your own
code supplies. The same is true of `log_docker_server_info`, whose `client`
you pass in.

## Running the tests

```
pip install -e .[test]
pytest
```