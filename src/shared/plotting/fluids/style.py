"""
Plotting Style Configuration for fluid plots.

Uses the seaborn darkgrid theme with serif fonts.
"""

import matplotlib.pyplot as plt
import seaborn as sns

plt.rcParams.update(
    {
        "font.family": "serif",
        "axes.labelsize": 12,
        "font.size": 11,
        "legend.fontsize": 10,
        "xtick.labelsize": 10,
        "ytick.labelsize": 10,
    }
)

# Set after rcParams so the theme keeps the font settings
sns.set_theme(style="darkgrid", rc={"font.family": "serif"})
