"""Helpers de execução paralela.

Abstrai o *fan-out/fan-in* usado pelo bootstrap por coluna: cada tarefa é
independente, os resultados voltam na ordem do iterável de entrada e só são
combinados depois que todos os workers terminam.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, wait
from typing import Any, Callable, Iterable, List, Optional

from joblib import Parallel, delayed

from ..config.constants import BACKENDS

__all__ = ["collect_exceptions", "parallel_map"]

logger = logging.getLogger(__name__)


def parallel_map(
    func: Callable,
    iterable: Iterable,
    backend: str = "sequential",
    max_workers: Optional[int] = None,
    timeout: Optional[float] = None,
) -> List[Any]:
    """
    Interface genérica semelhante a `map` para execução paralela de tarefas.

    Args:
        func (Callable): A função a ser aplicada a cada item do iterável.
        iterable (Iterable): O conjunto de dados a ser processado.
        backend (str): 'sequential' (padrão), 'thread', 'process' ou 'joblib'.
        max_workers (Optional[int]): Número máximo de workers. Se None, usa o
                                     padrão do backend.
        timeout (Optional[float]): Tempo máximo em segundos para o job inteiro
                                   (apenas backends 'thread' e 'process').

    Returns:
        List[Any]: Resultados na mesma ordem do iterável de entrada. Exceções
        de workers ('thread'/'process') são devolvidas no lugar do resultado;
        use :func:`collect_exceptions` para re-levantá-las.

    Raises:
        ValueError: Backend desconhecido.
        TimeoutError: Se o job exceder ``timeout``.
    """
    if backend not in BACKENDS:
        raise ValueError(
            f"Backend '{backend}' não reconhecido. Use {', '.join(repr(b) for b in BACKENDS)}."
        )

    items = list(iterable)
    job_name = getattr(func, "__name__", "anonymous_job")
    logger.debug("Iniciando job '%s' com backend '%s' (%d tarefas)", job_name, backend, len(items))
    start_time = time.perf_counter()

    if backend == "sequential" or max_workers == 1:
        results = [func(item) for item in items]
    elif backend == "joblib":
        results = Parallel(n_jobs=max_workers or -1, backend="loky")(
            delayed(func)(item) for item in items
        )
    else:
        executor_cls = ThreadPoolExecutor if backend == "thread" else ProcessPoolExecutor
        with executor_cls(max_workers=max_workers) as executor:
            futures = [executor.submit(func, item) for item in items]
            _, pending = wait(futures, timeout=timeout)
            if pending:
                for future in pending:
                    future.cancel()
                logger.error("Job '%s' excedeu o timeout de %ss.", job_name, timeout)
                raise TimeoutError(f"Job '{job_name}' exceeded timeout of {timeout}s")
            results = []
            for index, future in enumerate(futures):
                exc = future.exception()
                if exc is not None:
                    logger.error("Worker para o item %d gerou uma exceção: %s", index, exc)
                    results.append(exc)
                else:
                    results.append(future.result())

    elapsed = time.perf_counter() - start_time
    logger.debug("Job '%s' concluído em %.3fs.", job_name, elapsed)
    return results


def collect_exceptions(results: List[Any], re_raise: bool = True):
    """
    Separa exceções dos resultados de workers e opcionalmente as levanta.

    Returns:
        tuple[list, list]: (resultados_validos, excecoes).

    Raises:
        RuntimeError: Quando ``re_raise`` e houver ao menos uma exceção; a
        primeira exceção é encadeada como causa.
    """
    exceptions = [res for res in results if isinstance(res, BaseException)]
    valid_results = [res for res in results if not isinstance(res, BaseException)]

    if exceptions and re_raise:
        error_messages = "\n".join(f"  - {type(e).__name__}: {e}" for e in exceptions)
        raise RuntimeError(
            f"{len(exceptions)} worker(s) falharam com as seguintes exceções:\n{error_messages}"
        ) from exceptions[0]

    return valid_results, exceptions
