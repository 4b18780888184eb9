import warnings

from record_cleaner.cleaning import BatchJob, CleaningConfig, MissingValuePolicy, clean_all, clean_batch, parse_date


def _jobs():
    return [
        BatchJob("customers.csv", [{"id": "1", "name": " John "}, {"id": "1", "name": " John "}],
                 CleaningConfig(remove_duplicates=True, trim_whitespace=True)),
        BatchJob("broken.csv", "not a table", CleaningConfig()),
        BatchJob("orders.csv", [{"date": "15-02-2023", "total": ""}],
                 CleaningConfig(date_columns=["date"], missing_values=MissingValuePolicy("fill", "0"))),
    ]


def test_failures_are_reported_per_table():
    outcomes = clean_batch(_jobs())

    assert [outcome.name for outcome in outcomes] == ["customers.csv", "broken.csv", "orders.csv"]
    assert [outcome.status for outcome in outcomes] == ["complete", "error", "complete"]

    broken = outcomes[1]
    assert not broken.ok
    assert broken.result is None
    assert "list of rows" in broken.error

    customers = outcomes[0].result
    assert customers.data == [{"id": "1", "name": "John"}]
    assert customers.stats.duplicates_removed == 1

    orders = outcomes[2].result
    assert orders.data == [{"date": "2023-02-15", "total": "0"}]


def test_thread_pool_gives_the_same_outcomes():
    sequential = clean_batch(_jobs())
    parallel = clean_batch(_jobs(), max_workers=4)

    assert parallel == sequential


def test_outcome_matches_a_direct_run():
    job = _jobs()[0]

    (outcome,) = clean_batch([job])

    assert outcome.result == clean_all(job.table, job.config)


def test_empty_batch():
    assert clean_batch([]) == []


def test_threaded_batch_leaves_warning_filters_alone():
    parse_date.cache_clear()
    jobs = [
        BatchJob(f"events_{year}.csv", [{"when": f"Jan {day}, {year}"} for day in range(1, 11)],
                 CleaningConfig(date_columns=["when"]))
        for year in range(1980, 2020)
    ]
    filters_before = list(warnings.filters)

    outcomes = clean_batch(jobs, max_workers=16)

    assert warnings.filters == filters_before
    assert all(outcome.ok for outcome in outcomes)
    assert outcomes[0].result.data[0] == {"when": "1980-01-01"}
    assert outcomes[0].result.stats.dates_fixed == 10
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        warnings.warn("still reported", UserWarning)
    assert len(caught) == 1
