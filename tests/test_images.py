from pathlib import Path

import pytest

from containertest.images import (
    INDEX_DOCKER_IO,
    extract_images_from_dockerfile,
    extract_registry,
    is_url,
)

LOCALHOST_5000 = "localhost:5000"
HTTP_LOCALHOST_5000 = "http://" + LOCALHOST_5000
LOOPBACK_5000 = "127.0.0.1:5000"
HTTP_LOOPBACK_5000 = "http://" + LOOPBACK_5000
DOCKER_ELASTIC_CO = "docker.elastic.co"

DOCKERFILES = {
    "Dockerfile": "FROM nginx:${tag}\nCOPY . /usr/share/nginx/html\n",
    "Dockerfile.multistage": (
        "FROM nginx:a as builderA\n"
        "FROM nginx:b as builderB\n"
        "FROM nginx:c as builderC\n"
        "FROM scratch\n"
        "COPY --from=builderA /a /a\n"
    ),
    "Dockerfile.multistage.singleBuildArgs": (
        "ARG BASE_IMAGE\n"
        "FROM nginx:a as builderA\n"
        "FROM nginx:b as builderB\n"
        "FROM nginx:c as builderC\n"
        "FROM ${BASE_IMAGE}\n"
    ),
    "Dockerfile.multistage.multiBuildArgs": (
        "ARG BASE_IMAGE\n"
        "ARG REGISTRY_HOST\n"
        "ARG REGISTRY_PORT\n"
        "ARG NGINX_IMAGE\n"
        "FROM ${NGINX_IMAGE} as builderA\n"
        "FROM ${REGISTRY_HOST}:${REGISTRY_PORT}/${NGINX_IMAGE} as builderB\n"
        "FROM ${BASE_IMAGE}\n"
    ),
}


@pytest.fixture
def dockerfile_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "testdata"
    directory.mkdir()
    for name, content in DOCKERFILES.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


def test_extract_images_wrong_file():
    with pytest.raises(OSError):
        extract_images_from_dockerfile("", None)


@pytest.mark.parametrize(
    ("dockerfile", "build_args", "expected"),
    [
        ("Dockerfile", None, ["nginx:${tag}"]),
        ("Dockerfile.multistage", None, ["nginx:a", "nginx:b", "nginx:c", "scratch"]),
        (
            "Dockerfile.multistage.singleBuildArgs",
            {"BASE_IMAGE": "scratch"},
            ["nginx:a", "nginx:b", "nginx:c", "scratch"],
        ),
        (
            "Dockerfile.multistage.multiBuildArgs",
            {
                "BASE_IMAGE": "scratch",
                "REGISTRY_HOST": "localhost",
                "REGISTRY_PORT": "5000",
                "NGINX_IMAGE": "nginx:latest",
            },
            ["nginx:latest", "localhost:5000/nginx:latest", "scratch"],
        ),
    ],
)
def test_extract_images_from_dockerfile(dockerfile_dir, dockerfile, build_args, expected):
    assert extract_images_from_dockerfile(dockerfile_dir / dockerfile, build_args) == expected


def test_extract_images_ignores_unset_build_args(dockerfile_dir):
    images = extract_images_from_dockerfile(
        dockerfile_dir / "Dockerfile.multistage.singleBuildArgs", {"BASE_IMAGE": None}
    )
    assert images[-1] == "${BASE_IMAGE}"


@pytest.mark.parametrize(
    ("image", "expected"),
    [
        ("", ""),
        ("1234567890", INDEX_DOCKER_IO),
        ("--malformed--", INDEX_DOCKER_IO),
        ("testcontainers/ryuk:latest", INDEX_DOCKER_IO),
        ("testcontainers/ryuk", INDEX_DOCKER_IO),
        ("nginx:latest", INDEX_DOCKER_IO),
        ("nginx", INDEX_DOCKER_IO),
        ("localhost:5000/testcontainers/ryuk:latest", LOCALHOST_5000),
        ("localhost:5000/testcontainers/ryuk", LOCALHOST_5000),
        ("localhost:5000/ryuk:latest", LOCALHOST_5000),
        ("localhost:5000/nginx", LOCALHOST_5000),
        ("http://localhost:5000/testcontainers/ryuk:latest", HTTP_LOCALHOST_5000),
        ("http://localhost:5000/testcontainers/ryuk", HTTP_LOCALHOST_5000),
        ("http://localhost:5000/ryuk:latest", HTTP_LOCALHOST_5000),
        ("http://localhost:5000/nginx", HTTP_LOCALHOST_5000),
        ("127.0.0.1:5000/testcontainers/ryuk:latest", LOOPBACK_5000),
        ("127.0.0.1:5000/testcontainers/ryuk", LOOPBACK_5000),
        ("127.0.0.1:5000/ryuk:latest", LOOPBACK_5000),
        ("127.0.0.1:5000/nginx", LOOPBACK_5000),
        ("http://127.0.0.1:5000/testcontainers/ryuk:latest", HTTP_LOOPBACK_5000),
        ("http://127.0.0.1:5000/testcontainers/ryuk", HTTP_LOOPBACK_5000),
        ("http://127.0.0.1:5000/ryuk:latest", HTTP_LOOPBACK_5000),
        ("http://127.0.0.1:5000/nginx", HTTP_LOOPBACK_5000),
        ("docker.elastic.co/elasticsearch/elasticsearch:8.6.2", DOCKER_ELASTIC_CO),
        ("docker.elastic.co/elasticsearch/elasticsearch", DOCKER_ELASTIC_CO),
        ("docker.elastic.co/elasticsearch:latest", DOCKER_ELASTIC_CO),
        ("docker.elastic.co/elasticsearch", DOCKER_ELASTIC_CO),
    ],
)
def test_extract_registry(image, expected):
    assert extract_registry(image, INDEX_DOCKER_IO) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (LOCALHOST_5000, True),
        (HTTP_LOCALHOST_5000, True),
        (LOOPBACK_5000, True),
        (DOCKER_ELASTIC_CO, True),
        ("", False),
        ("testcontainers", False),
        (".docker.io", False),
        ("abc", False),
        ("a" * 2083 + ".com", False),
    ],
)
def test_is_url(value, expected):
    assert is_url(value) is expected