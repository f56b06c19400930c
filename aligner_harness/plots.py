import matplotlib.pyplot as plt


def tier_rows(tier_counts):
    """ (tier, num_reads) rows for every tier up to the highest one seen. """
    if not tier_counts:
        return []
    return [(tier, tier_counts.get(tier, 0)) for tier in range(max(tier_counts) + 1)]


# Write the number of matched reads per tier to a table
def write_tier_counts(tier_counts, out_counts):
    with open(out_counts, 'w') as w:
        w.write("tier\tnum_reads\n")
        for tier, count in tier_rows(tier_counts):
            w.write("%s\t%s\n" % (tier, count))


# Save a bar chart of the number of matched reads per tier
def plot_tier_counts(tier_counts, out_fig, title = None):
    rows = tier_rows(tier_counts)
    plt.figure()
    plt.bar([tier for tier, _ in rows], [count for _, count in rows])
    if title is not None:
        plt.title(title)
    plt.xlabel("Tier of matching alignment")
    plt.ylabel("Number of reads")
    plt.savefig(out_fig)
    plt.close()
